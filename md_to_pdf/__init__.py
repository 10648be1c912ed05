"""md-to-pdf: Markdown (+ Mermaid) documents to a bookmarked PDF."""

__version__ = "1.0.0"
