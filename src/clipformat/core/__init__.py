"""Core domain package for clipformat.

Core contains seed extraction, detectors, and the arithmetic and date
engines without any clipboard, OS, or file access, keeping the business
logic portable.
"""
