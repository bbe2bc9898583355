"""
RSS Summarizer Backend

A FastAPI backend for the RSS reader mobile app.
Fetches articles and discussion threads and summarizes them with an LLM.
"""

__version__ = "1.0.0"
