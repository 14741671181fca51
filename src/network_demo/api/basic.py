"""
Basic Transport Module

Plain httpx calls with no shared configuration, no pipeline stages and
no error taxonomy. The caller checks the status code and parses the
body by hand. Kept as a contrast to APIClient.
"""

import logging
from typing import List

import httpx

from .models import Post


logger = logging.getLogger(__name__)

POSTS_URL = "https://jsonplaceholder.typicode.com/posts"


def fetch_posts_basic(url: str = POSTS_URL, timeout: float = 10.0) -> List[Post]:
    """
    Fetch posts with a single plain GET.

    Args:
        url: Absolute URL of the posts collection.
        timeout: Seconds before giving up.

    Returns:
        List of Post objects.

    Raises:
        RuntimeError: On timeout or any status other than 200.
    """
    logger.info(f"Fetching posts from {url}")

    try:
        response = httpx.get(url, timeout=timeout)
    except httpx.TimeoutException as e:
        raise RuntimeError("Request timeout") from e

    if response.status_code != 200:
        raise RuntimeError(f"Failed to load posts. Status: {response.status_code}")

    posts = [Post.from_json(item) for item in response.json()]
    logger.info(f"Fetched {len(posts)} posts successfully")
    return posts
