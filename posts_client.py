"""Blog Posts API client.

This module defines a small client wrapper around the REST API served
by ``blog_api``.  It uses the ``requests`` library internally and
exposes one method per operation:

* :meth:`PostsAPI.list_posts` – return every post.
* :meth:`PostsAPI.create_post` – create a post from a partial payload.
* :meth:`PostsAPI.update_post` – apply a partial payload to a post.
* :meth:`PostsAPI.delete_post` – delete a post.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure it is a dictionary with the keys ``status_code``
and ``message``.  The module can also be run as a script::

    python posts_client.py --base-url http://localhost:3000 list
    python posts_client.py create --title "Hello" --author "Me"
    python posts_client.py update post_1678886400000 --title "Edited"
    python posts_client.py delete post_1678886400000
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"
POSTS_PATH = "/api/posts"
POST_FIELDS = ("title", "snippet", "fullContent", "author", "date")

Error = Dict[str, Any]


class PostsAPI:
    """Client for interacting with the blog posts API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` contains the parsed JSON
            response on success (``None`` for empty bodies) and ``error``
            is ``None``.  On failure ``data`` is ``None`` and ``error``
            describes the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Post operations
    # ------------------------------------------------------------------
    def list_posts(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all posts.

        Returns:
            A tuple ``(posts, error)``.  ``posts`` is empty on failure.
        """
        data, error = self._request("GET", POSTS_PATH)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def create_post(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a post.

        Args:
            payload: Post fields; ``id`` and ``timestamp`` are assigned by
                the server.
        Returns:
            A tuple ``(post, error)``.
        """
        return self._request("POST", POSTS_PATH, json_body=payload)

    def update_post(self, post_id: str, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update a post.

        Args:
            post_id: Identifier of the post.
            payload: Fields to overwrite; other fields are kept.
        Returns:
            A tuple ``(post, error)``.
        """
        return self._request("PUT", f"{POSTS_PATH}/{post_id}", json_body=payload)

    def delete_post(self, post_id: str) -> Tuple[bool, Optional[Error]]:
        """Delete a post.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"{POSTS_PATH}/{post_id}")
        if error:
            return False, error
        return True, None


def _payload_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    payload = {field: getattr(args, field) for field in POST_FIELDS if getattr(args, field) is not None}
    if args.images is not None:
        payload["images"] = json.loads(args.images)
    return payload


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Command line client for the Blog Posts API.")
    ap.add_argument(
        "--base-url",
        default=os.getenv("POSTS_API_URL", DEFAULT_BASE_URL),
        help="Server base URL (default: $POSTS_API_URL or %(default)s)",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all posts")

    def add_fields(parser: argparse.ArgumentParser) -> None:
        for field in POST_FIELDS:
            parser.add_argument(f"--{field}")
        parser.add_argument("--images", help='JSON list, e.g. \'[{"url": "...", "prompt": "..."}]\'')

    add_fields(sub.add_parser("create", help="Create a post"))

    update = sub.add_parser("update", help="Update a post")
    update.add_argument("post_id")
    add_fields(update)

    delete = sub.add_parser("delete", help="Delete a post")
    delete.add_argument("post_id")
    return ap


def main(argv: Optional[List[str]] = None, client: Optional[PostsAPI] = None) -> int:
    args = build_parser().parse_args(argv)
    client = client or PostsAPI(base_url=args.base_url)

    if args.command == "list":
        data, error = client.list_posts()
    elif args.command == "create":
        data, error = client.create_post(_payload_from_args(args))
    elif args.command == "update":
        data, error = client.update_post(args.post_id, _payload_from_args(args))
    else:
        deleted, error = client.delete_post(args.post_id)
        data = {"deleted": args.post_id} if deleted else None

    if error:
        print(f"[!] {error['message']} (status: {error['status_code']})", file=sys.stderr)
        return 1
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
