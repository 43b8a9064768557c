"""
Topic-gated question answering API backed by an Ollama model
"""
__version__ = "1.0.0"
