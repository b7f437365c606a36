"""gh-aw: compiles agentic workflow markdown into gated GitHub Actions jobs."""

__version__ = "0.1.0"
