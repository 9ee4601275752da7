"""VoteSmart registry API: curated candidate recommendations by campaign and district."""

__version__ = "0.1.0"
