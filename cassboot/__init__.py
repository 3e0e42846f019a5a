"""Cassboot - bootstrap and supervise a long-running JVM server daemon."""
