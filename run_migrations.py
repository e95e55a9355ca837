"""
Database migration runner for Tortoise ORM using Aerich.

Applies the migrations shipped in `migrations/models` to the configured Supabase
Postgres database. Pass `--make` to generate a new migration from model changes
before applying it.
"""

import asyncio
import logging
import os
import subprocess
import sys

from tortoise import Tortoise

from app.config import TORTOISE_ORM

MIGRATIONS_DIR = os.path.join("migrations", "models")

logger = logging.getLogger(__name__)


async def ensure_tortoise_connected():
    """Open and close a connection to make sure the configured database is reachable."""
    try:
        await Tortoise.init(config=TORTOISE_ORM)
    except Exception as e:
        logger.error("Failed to initialize Tortoise ORM: %s", str(e))
        raise
    finally:
        await Tortoise.close_connections()


def run_command(cmd):
    """Execute a command and log the result."""
    try:
        # Split command for security (avoid shell=True)
        cmd_list = cmd.split()
        result = subprocess.run(cmd_list, capture_output=True, text=True, check=True)
        logger.info("Command executed successfully: %s", result.stdout)
    except subprocess.CalledProcessError as e:
        logger.error("Command failed with return code %s: %s", e.returncode, e.stderr)
        raise


def is_first_time():
    """No migration file yet means the database has never been initialised by aerich."""
    if not os.path.exists(MIGRATIONS_DIR):
        return True

    migration_files = [f for f in os.listdir(MIGRATIONS_DIR) if f.endswith(".py")]
    return len(migration_files) == 0


async def run(make_migration: bool = False):
    await ensure_tortoise_connected()

    try:
        if is_first_time():
            logger.info("First-time setup: running aerich init-db...")
            run_command("aerich init-db")
            return

        if make_migration:
            logger.info("Generating migration from model changes...")
            run_command("aerich migrate")

        logger.info("Running aerich upgrade...")
        run_command("aerich upgrade")
    except subprocess.CalledProcessError:
        logger.error("Migration failed - this may require manual intervention")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(run(make_migration="--make" in sys.argv[1:]))
