"""Reusable form extensions."""

from .csrf import CsrfTokenExtension, generate_csrf_token

__all__ = ["CsrfTokenExtension", "generate_csrf_token"]
