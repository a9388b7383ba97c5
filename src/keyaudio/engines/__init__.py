"""Playback engines. Each backend lives in its own module so that importing one doesn't require the others."""
