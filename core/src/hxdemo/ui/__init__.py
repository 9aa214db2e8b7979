"""Server-rendered web UI.

- pages render as full documents for plain navigation
- htmx requests receive only the swappable content
- no runtime Node dependency; htmx itself is loaded from a CDN
"""
