"""Error taxonomy for revision descriptions."""

from __future__ import annotations


class DescribeError(Exception):
    """Base class for all describe failures."""


class ConfigError(DescribeError):
    """Invalid settings, sub-path or config file."""


class RepositoryError(DescribeError):
    """Repository could not be opened or a reference did not resolve."""


class NoTagsError(DescribeError):
    """The repository has no usable tags."""


class TagResolutionError(DescribeError):
    """A single tag could not be peeled to a commit."""


class GraphIntegrityError(DescribeError):
    """A commit referenced by the ancestry graph could not be loaded."""
