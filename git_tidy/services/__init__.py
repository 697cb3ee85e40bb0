"""Services for git-tidy."""
