#!/usr/bin/env python3
"""
One-shot post synchronization from the remote source into the database
"""

import os
import sys
import argparse
import asyncio
import logging

from dotenv import load_dotenv

# Settings read the environment at import time
load_dotenv()

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config.settings import LOG_LEVEL
from database.connection import init_database, close_database
from repositories.post_repository import AsyncpgPostRepository
from services.post_service import PostService
from services.posts_source import PostsSourceClient

logger = logging.getLogger(__name__)


async def run_sync(source_url: str = None, database_url: str = None) -> int:
    """Run a single synchronization and return the number of added posts"""
    await init_database(database_url)
    try:
        service = PostService(AsyncpgPostRepository(), PostsSourceClient(url=source_url))
        added = await service.fetch_and_save_posts()
    finally:
        await close_database()

    logger.info(f"Sync finished: {len(added)} posts added")
    for post in added:
        print(f"  + [{post.id}] {post.title}")
    return len(added)


def main(argv=None):
    """Main CLI interface"""
    parser = argparse.ArgumentParser(description="Synchronize remote posts into the local database")
    parser.add_argument("--source-url", help="Remote posts endpoint (defaults to POSTS_SOURCE_URL)")
    parser.add_argument("--database-url", help="Database DSN (defaults to DATABASE_URL)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL)

    added_count = asyncio.run(run_sync(args.source_url, args.database_url))
    print(f"Added {added_count} new posts")
    return 0


if __name__ == "__main__":
    sys.exit(main())
