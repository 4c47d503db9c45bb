"""Blog REST API: users, posts and comments persisted to flat JSON files."""
