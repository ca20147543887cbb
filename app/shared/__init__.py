"""Shared cross-cutting helpers: logging setup and utilities. No business logic."""
