"""
JSON-backed Post Store.

The notifier needs exactly one thing from post storage: turning a bare post id
into a full post record (with its metadata). In a real deployment the host CMS
answers that; this store reads fixture files so the demo, the API and the
tests have a concrete collaborator.

Design decisions:
- Fixtures are loaded lazily on first access
- Write operations update in-memory state only (for demo scenarios)
- ``resolve`` raises PostNotFoundError instead of returning an empty record
"""

import json
from pathlib import Path
from typing import Optional

from shared.models import PostRecord, SiteRef
from syndication.errors import PostNotFoundError


class PostStore:
    """
    Post and site lookups backed by ``posts.json`` / ``sites.json``.

    Example:
        store = PostStore(data_dir=Path("data"))
        post = store.resolve(5)
        post.guid  # "http://example.com/?p=5"
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize the post store.

        Args:
            data_dir: Directory containing the JSON fixtures.
                     Defaults to ./data relative to project root.
        """
        if data_dir is None:
            data_dir = Path(__file__).parent.parent / "data"

        self.data_dir = Path(data_dir)

        # In-memory caches - loaded lazily
        self._posts: Optional[dict[int, PostRecord]] = None
        self._sites: Optional[dict[int, SiteRef]] = None

    # =========================================================================
    # Data Loading (lazy)
    # =========================================================================

    def _load_json(self, filename: str) -> list[dict]:
        """Load a JSON fixture file."""
        filepath = self.data_dir / filename
        if not filepath.exists():
            return []
        with open(filepath, "r") as f:
            return json.load(f)

    def _ensure_posts_loaded(self):
        if self._posts is None:
            data = self._load_json("posts.json")
            posts = (PostRecord.model_validate(p) for p in data)
            self._posts = {p.id: p for p in posts}

    def _ensure_sites_loaded(self):
        if self._sites is None:
            data = self._load_json("sites.json")
            sites = (SiteRef.model_validate(s) for s in data)
            self._sites = {s.id: s for s in sites}

    # =========================================================================
    # Post Operations
    # =========================================================================

    def get_post(self, post_id: int) -> Optional[PostRecord]:
        """Get a post by id, or None."""
        self._ensure_posts_loaded()
        return self._posts.get(post_id)

    def resolve(self, post_id: int) -> PostRecord:
        """
        Resolve a bare post id to its full record.

        Raises:
            PostNotFoundError: If no post has this id
        """
        post = self.get_post(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    def get_posts(self) -> list[PostRecord]:
        """Get all posts."""
        self._ensure_posts_loaded()
        return list(self._posts.values())

    def save_post(self, post: PostRecord) -> PostRecord:
        """Add or replace a post (in memory only)."""
        self._ensure_posts_loaded()
        self._posts[post.id] = post
        return post

    def set_post_meta(self, post_id: int, key: str, value: str) -> PostRecord:
        """
        Set one meta value on a post (in memory only).

        The engine stamps ``is_update`` this way when it re-syndicates a post.
        """
        post = self.resolve(post_id)
        updated = post.model_copy(update={"post_meta": {**post.post_meta, key: value}})
        return self.save_post(updated)

    # =========================================================================
    # Site Operations
    # =========================================================================

    def get_site(self, site_id: int) -> Optional[SiteRef]:
        """Get a syndicated site by id, or None."""
        self._ensure_sites_loaded()
        return self._sites.get(site_id)

    def get_sites(self) -> list[SiteRef]:
        """Get all syndicated sites."""
        self._ensure_sites_loaded()
        return list(self._sites.values())

    def reload(self):
        """Drop cached data so the next access re-reads the fixtures."""
        self._posts = None
        self._sites = None


# Module-level singleton for convenience
_default_store: Optional[PostStore] = None


def get_post_store() -> PostStore:
    """Get the default post store singleton."""
    global _default_store
    if _default_store is None:
        _default_store = PostStore()
    return _default_store
