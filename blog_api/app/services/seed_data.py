"""Posts the store is initialised with at startup."""

from typing import Any, Dict, List

SEED_POSTS: List[Dict[str, Any]] = [
    {
        "id": "post_1678886400000",
        "title": "First Blog Post",
        "snippet": "A short introduction to my blog.",
        "fullContent": (
            "This is the full content of the first blog post. It covers various "
            "topics related to web development and personal experiences."
        ),
        "author": "Sourabh Madane",
        "date": "2023-03-15",
        "timestamp": 1678886400000,
        "images": [],
    },
    {
        "id": "post_1678972800000",
        "title": "Angular Standalone Components",
        "snippet": "Exploring the new features in Angular 17+.",
        "fullContent": (
            "Dive deep into Angular 17's standalone components, a feature that "
            "simplifies the Angular development experience by removing the need "
            "for NgModules."
        ),
        "author": "Sourabh Madane",
        "date": "2023-03-16",
        "timestamp": 1678972800000,
        "images": [
            {
                "url": "https://placehold.co/600x400/87CEFA/FFFFFF?text=Angular+17",
                "prompt": "Angular 17 logo concept",
            },
            {
                "url": "https://placehold.co/600x400/D4BFFF/FFFFFF?text=Standalone",
                "prompt": "Code snippets for standalone components",
            },
        ],
    },
]
