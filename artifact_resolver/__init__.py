"""
artifact-resolver resolves and streams artifacts from configured sources.

Sources are configured as named credentials of a given type. Any of them can
stream the bytes of a referenced artifact, and sources that publish an index
(such as Helm chart repositories) can also list artifact names and versions
without downloading the artifacts themselves.
"""

__all__ = [
    "config",
    "controller",
    "credentials",
    "downloader",
    "exceptions",
    "index",
    "reference",
    "repository",
    "resolution",
    "transport",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
