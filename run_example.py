"""
Working example: generate one reel without the API server.

Usage:
    python run_example.py "Serena Williams"
"""
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

from reelgen.config import get_config
from reelgen.api.dependencies import build_orchestrator
from reelgen.providers import ReelError, get_storage_gateway


async def run(subject_name: str) -> int:
    config = get_config()
    config.log_status()

    storage = get_storage_gateway(config.storage, config.storage_backend)
    orchestrator = build_orchestrator(config, storage)

    try:
        reel = await orchestrator.generate_and_upload_reel(subject_name)
    except ReelError as e:
        logger.error(f"Reel generation failed: {e}")
        return 1

    print("=" * 50)
    print(f"Reel stored at: {reel.key}")
    print(f"Size: {reel.size} bytes")
    print("=" * 50)
    return 0


def main():
    if len(sys.argv) < 2 or not sys.argv[1].strip():
        print('Usage: python run_example.py "<celebrity name>"')
        sys.exit(2)

    sys.exit(asyncio.run(run(" ".join(sys.argv[1:]))))


if __name__ == "__main__":
    main()
