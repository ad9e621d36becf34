#!/usr/bin/env python3
"""
Запуск API: python -m scripts.run_server
или: PYTHONPATH=. python scripts/run_server.py
HOST/PORT берутся из .env (по умолчанию 0.0.0.0:4242).
"""
import uvicorn

from storefront.core.config import settings
from storefront.core.logging import configure_logging


def main():
    configure_logging()
    uvicorn.run("storefront.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
