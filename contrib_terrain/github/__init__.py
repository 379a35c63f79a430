"""
GitHub contribution calendar input: fetching, parsing and sample data.
"""

from .fetch import ContributionFetchError, retrieve_contribution_data
from .parse_data import ApiResponse, parse_contribution_data
from .sample import generate_sample_data, generate_zero_contributions

__all__ = ['ContributionFetchError', 'retrieve_contribution_data', 'ApiResponse',
           'parse_contribution_data', 'generate_sample_data', 'generate_zero_contributions']
