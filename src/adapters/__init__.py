"""Adapters: httpx client with the interceptor pipeline, session stores, endpoint table and domain facades."""
