"""
Seller and user stories, kept in one shared ``stories`` collection.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from catalog_store.contracts.records import Story, utcnow
from catalog_store.database.collections import STORIES
from catalog_store.engine.query import sort_timestamp
from catalog_store.services.base import CollectionService


class StoryService(CollectionService):
    async def list_stories(self) -> List[Story]:
        """Every stored story, in stored order."""
        return await self._load(STORIES)

    async def active_stories(self, now: Optional[datetime] = None) -> List[Story]:
        now = sort_timestamp(now or utcnow())
        return [s for s in await self._load(STORIES) if sort_timestamp(s.expires_at) > now]

    async def add_story(self, story: Story) -> Story:
        return await self._upsert(STORIES, story)

    async def mark_viewed(self, story_id: str) -> bool:
        stories = await self._load(STORIES)
        for i, story in enumerate(stories):
            if story.id == story_id and not story.is_viewed:
                stories[i] = story.model_copy(update={"is_viewed": True})
                await self._save(STORIES, stories)
                return True
        return False
