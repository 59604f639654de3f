"""vidchat - chat with a video transcript from your terminal."""

__version__ = "0.3.0"
