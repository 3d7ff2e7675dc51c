"""
InternMatch
Internship and language-exchange matchmaking with AI-assisted ranking.

Architecture:
- PostgreSQL: Structured data (users, jobs, companies, languages, skills)
- MongoDB: Translation cache
- Completion service: match ranking and translation only, always with a local fallback
"""

__version__ = "1.0.0"
