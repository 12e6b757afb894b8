"""Main entry point for the tutor server."""

import logging

import uvicorn
from rich.console import Console
from rich.panel import Panel

from buddy.config import Config

console = Console()


def main():
    """Run the tutor server."""
    config = Config.from_env()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    console.print(
        Panel.fit(
            f"Host: {config.server_host}\n"
            f"Port: {config.server_port}\n"
            f"Model: {config.model}\n"
            f"Gateway: {config.gateway_base_url}",
            title="Starting Language Buddy Tutor Server",
        )
    )

    if not config.gateway_api_key:
        console.print("[yellow]Warning: LOVABLE_API_KEY not set.[/yellow]")

    uvicorn.run(
        "buddy.server:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
