"""Application services: authentication, migration and tracking."""
