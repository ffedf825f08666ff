#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: request handlers are synchronous and run in the server's
threadpool, one thread per request. A single reaper thread removes expired
entries in the background. All of them share one in-memory store built here.

Usage:
    python app.py
    python app.py --hash-token SECRET   # print the sha256 to use as TOKEN_SHA256

Environment variables:
    TOKEN_SHA256 - SHA-256 of the secret token (required)
    HOST - Public hostname (default localhost)
    PORT - HTTPS listen port (default 443)
    BASE_URL - Canonical base URL for short links (derived if unset)
    URL_TTL_SECONDS - Default lifetime of short URLs
    REAPER_INTERVAL_SECONDS - Seconds between reaper passes
    TLS_KEY_FILE / TLS_CERT_FILE - TLS key and certificate chain
    LOG_LEVEL - Logging level
"""

import argparse
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from config import load_config
from shortener.store import ExpiringStore
from shortener.reaper import Reaper
from shortener.service import URLShortenerService
from shortener.common.auth import hash_token
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the reaper with the server and stop it on shutdown."""
    logger = app.state.logger
    reaper = app.state.reaper
    
    logger.info("Starting URL shortener service...")
    reaper.start()
    
    yield
    
    logger.info("Shutting down URL shortener service...")
    # The store is memory-only, so a reaper stuck mid-pass is simply dropped
    reaper.stop(timeout=5)
    logger.info("Service stopped")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Self-hosted URL shortener with expiring links")
    parser.add_argument(
        "--hash-token",
        metavar="VALUE",
        help="Print the sha256 of VALUE (for TOKEN_SHA256) and exit",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    
    if args.hash_token:
        print(hash_token(args.hash_token))
        return
    
    try:
        config = load_config()
    except ValidationError as e:
        sys.exit(f"Invalid configuration:\n{e}")
    
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    
    logger.info("URL Shortener Service")
    logger.info(f"Canonical host: {config.base_url}")
    logger.info(f"URL TTL: {config.url_ttl}")
    logger.info(f"Token: {config.token_sha256}")
    
    # One store for the lifetime of the process, handed to every consumer
    store = ExpiringStore(default_ttl=config.url_ttl)
    service = URLShortenerService(
        store=store,
        max_collision_retries=config.max_collision_retries,
    )
    reaper = Reaper(store, interval=config.reaper_interval_seconds)
    
    app = create_app(
        store=store,
        service=service,
        config=config,
        reaper=reaper,
        lifespan=lifespan,
    )
    app.state.logger = logger
    
    uvicorn_config = uvicorn.Config(
        app,
        host=config.bind_address,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
        ssl_keyfile=config.tls_key_file,
        ssl_certfile=config.tls_cert_file,
    )
    
    server = uvicorn.Server(uvicorn_config)
    
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True
    
    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)
    
    scheme = "https" if config.tls_cert_file else "http"
    try:
        logger.info(f"Starting server on {scheme}://{config.bind_address}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
