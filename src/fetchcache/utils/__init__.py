"""Utility helpers for fetchcache."""
