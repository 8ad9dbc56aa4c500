"""Domain layer — manifest model, XML codec, summarizer, filter engine.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
