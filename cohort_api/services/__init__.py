"""Services - one class per MongoDB collection."""
