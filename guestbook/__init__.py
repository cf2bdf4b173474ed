"""Guestbook: account registration, cookie sessions and a public guestbook."""
