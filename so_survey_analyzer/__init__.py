"""Explore survey workbooks: question search, answer distributions and respondent subsets."""

__version__ = "0.1.0"