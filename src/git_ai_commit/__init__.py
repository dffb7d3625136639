"""AI-drafted git commit messages with an interactive review loop."""

__version__ = "1.0.0"

from .assistant import CommitAssistant
from .config import CommitOptions
from .models import CommitMessage

__all__ = ["CommitAssistant", "CommitOptions", "CommitMessage", "__version__"]
