"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Audio (yt-dlp catalog search, mpv player process)
- Terminal (rich menu, console presenter, shutdown wiring)
"""
