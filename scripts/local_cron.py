"""
Local cron simulator for development.

Calls the reminder endpoint at a fixed interval, the way a hosted scheduler
would in production.

    CRON_SECRET=... python scripts/local_cron.py --url http://localhost:8000
"""
import argparse
import asyncio
import logging
import os

import httpx

from rentdesk.logging_setup import setup_logging

logger = logging.getLogger("rentdesk.local_cron")

REMINDERS_PATH = "/api/tasks/reminders"


async def trigger(client: httpx.AsyncClient, url: str, secret: str, run: int) -> None:
    logger.info("Run #%d - triggering %s", run, url)
    try:
        response = await client.post(url, headers={"Authorization": f"Bearer {secret}"})
    except httpx.HTTPError as e:
        logger.error("Network error: %s", e)
        return

    if response.is_success:
        result = response.json()
        logger.info(
            "%s (reminders=%d due=%d, %dms)",
            result.get("message"),
            result.get("reminders_sent", 0),
            result.get("due_notifications_sent", 0),
            result.get("duration_ms", 0),
        )
    else:
        logger.error("Error: %s %s", response.status_code, response.text)


async def main(base_url: str, secret: str, interval: float) -> None:
    url = base_url.rstrip("/") + REMINDERS_PATH
    logger.info("Local cron started endpoint=%s interval=%.0fs", url, interval)

    run = 0
    async with httpx.AsyncClient(timeout=30.0) as client:
        while True:
            run += 1
            await trigger(client, url, secret, run)
            await asyncio.sleep(interval)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Trigger reminder processing on a timer.")
    parser.add_argument("--url", default="http://localhost:8000", help="API base URL")
    parser.add_argument("--interval", type=float, default=60.0, help="Seconds between runs")
    parser.add_argument("--secret", default=os.environ.get("CRON_SECRET", "dev-secret"))
    args = parser.parse_args()

    setup_logging("INFO")
    try:
        asyncio.run(main(args.url, args.secret, args.interval))
    except KeyboardInterrupt:
        logger.info("Stopping local cron")
