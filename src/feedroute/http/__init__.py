"""feedroute HTTP utilities.

Example:
    >>> from feedroute.http import HttpClient
    >>>
    >>> async with HttpClient() as client:
    ...     data = await client.post_json("https://api.example.com/list")
"""

from feedroute.http.client import HttpClient, ResponseType

__all__ = [
    "HttpClient",
    "ResponseType",
]
