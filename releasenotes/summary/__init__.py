"""Gemini summaries of release notes"""
