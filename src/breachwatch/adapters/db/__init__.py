"""Database plumbing shared by breachwatch's SQLAlchemy adapters."""
