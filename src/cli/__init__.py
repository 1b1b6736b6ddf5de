"""Command-line tools for operating a lifelog deployment.

    python -m src.cli set-webhook [URL]
    python -m src.cli webhook-info
    python -m src.cli delete-webhook
"""
