"""
SQLAlchemy and pydantic models.
"""
