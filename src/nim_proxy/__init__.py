"""OpenAI-compatible proxy for NVIDIA NIM chat completions"""

__version__ = "0.1.0"
