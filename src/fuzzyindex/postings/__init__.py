"""Posting record emitters and drivers."""
