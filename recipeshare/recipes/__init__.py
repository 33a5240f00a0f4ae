"""
Recipe query core.

Responsibilities:
- Translate listing filters into store predicates, then sort and paginate.
- Match free-text ingredients against recipes and rank the matches.
- Hold the in-memory recipe store the API layer reads from.
"""
