"""File system traversal producing curated entry trees.

This package provides the entry tree model, the walker that builds it while
summarizing ignored directories, the aggregator that measures summarized
subtrees, and the directory summary used for the depth-0 overview.
"""
