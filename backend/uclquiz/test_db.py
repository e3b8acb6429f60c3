from __future__ import annotations

from unittest import IsolatedAsyncioTestCase

from .db import InMemoryCollection


class InMemoryCollectionTests(IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.collection = InMemoryCollection()

    async def test_find_sorts_on_one_key(self):
        for doc_id in (3, 1, 2):
            await self.collection.insert_one({"id": doc_id, "kind": "q"})
        await self.collection.insert_one({"id": 9, "kind": "other"})

        ascending = await self.collection.find({"kind": "q"}).sort("id", 1).to_list()
        descending = await self.collection.find({"kind": "q"}).sort("id", -1).to_list()

        self.assertEqual([d["id"] for d in ascending], [1, 2, 3])
        self.assertEqual([d["id"] for d in descending], [3, 2, 1])

    async def test_find_without_sort_keeps_insertion_order(self):
        for doc_id in (3, 1, 2):
            await self.collection.insert_one({"id": doc_id})

        self.assertEqual([d["id"] async for d in self.collection.find()], [3, 1, 2])

    async def test_find_one_and_update_returns_updated_document(self):
        first = await self.collection.find_one_and_update({"_id": "questions"}, {"$inc": {"seq": 1}}, upsert=True)
        second = await self.collection.find_one_and_update({"_id": "questions"}, {"$inc": {"seq": 1}}, upsert=True)

        self.assertEqual(first, {"_id": "questions", "seq": 1})
        self.assertEqual(second, {"_id": "questions", "seq": 2})
        self.assertEqual(await self.collection.count_documents({}), 1)

    async def test_find_one_and_update_without_upsert_misses(self):
        result = await self.collection.find_one_and_update({"_id": "nope"}, {"$inc": {"seq": 1}})

        self.assertIsNone(result)
        self.assertIsNone(await self.collection.find_one({"_id": "nope"}))
