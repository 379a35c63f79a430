"""
GitHub GraphQL client for contribution calendars.
"""

import requests
import structlog
from pydantic import ValidationError
from typing import Optional

from .parse_data import ApiResponse

logger = structlog.get_logger()

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"

CONTRIBUTIONS_QUERY = """
  query($userName: String!) {
    user(login: $userName) {
      contributionsCollection {
        contributionCalendar {
          totalContributions
          weeks {
            contributionDays {
              contributionCount
              date
            }
          }
        }
      }
    }
  }
"""


class ContributionFetchError(RuntimeError):
    """Raised when the contribution calendar cannot be retrieved."""


def retrieve_contribution_data(
    user_name: str,
    token: Optional[str],
    api_url: str = GITHUB_GRAPHQL_URL,
    timeout: float = 30.0,
) -> ApiResponse:
    """
    Fetch a user's contribution calendar.

    Args:
        user_name: GitHub login
        token: Personal access token
        api_url: GraphQL endpoint
        timeout: Request timeout in seconds

    Returns:
        Validated API response

    Raises:
        ContributionFetchError: Missing token, HTTP or transport failure,
            unexpected payload, or unknown user
    """
    if not token:
        raise ContributionFetchError(
            "Missing GitHub token. Set CONTRIB_TERRAIN_GITHUB_TOKEN in your environment (or .env)."
        )

    logger.info("Fetching contribution calendar", user=user_name)
    try:
        response = requests.post(
            api_url,
            json={"query": CONTRIBUTIONS_QUERY, "variables": {"userName": user_name}},
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise ContributionFetchError(f"GitHub API request failed: {e}") from e

    if not response.ok:
        raise ContributionFetchError(
            f"GitHub API error: {response.status_code} {response.reason} - {response.text}"
        )

    try:
        payload = ApiResponse.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise ContributionFetchError(f"Unexpected GitHub API response: {e}") from e

    if payload.data.user is None:
        raise ContributionFetchError(f'User "{user_name}" not found')

    logger.info(
        "Fetched contribution calendar",
        user=user_name,
        total=payload.calendar.total_contributions,
    )
    return payload
