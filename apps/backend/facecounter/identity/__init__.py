"""Identity border: password hashing and session cookies."""
