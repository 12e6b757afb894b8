#!/usr/bin/env python3
"""Chat with a running tutor server from the terminal.

Keeps a rolling conversation history the way the web client does.

Run: python scripts/chat.py --mode free --target_language french
"""

import asyncio
from dataclasses import dataclass

import httpx
from rich.console import Console
from rich.markdown import Markdown
import simple_parsing as sp

from buddy.config import CONVERSATION_HISTORY_LIMIT, Config


@dataclass
class Args:
    """Terminal client for the Language Buddy tutor."""

    mode: str = "coach"  # coach or free
    topic: str = "general"  # general, travel, food, introductions, shopping, daily
    user_level: str = "beginner"  # beginner, intermediate or advanced
    coach_style: str = "gentle"  # gentle or strict
    explain_in_english: bool = True  # Allow English explanations
    target_language: str = "spanish"  # spanish, french, italian or english
    url: str = ""  # Tutor endpoint, defaults to the local server


console = Console()


async def chat(args: Args) -> None:
    config = Config.from_env()
    url = args.url or f"http://localhost:{config.server_port}/tutor"
    history: list[dict[str, str]] = []

    console.rule(f"[bold blue]Language Buddy ({args.target_language}, {args.mode} mode)")
    console.print("Type a message, or 'quit' to exit.\n")

    async with httpx.AsyncClient(timeout=60.0) as client:
        while True:
            message = console.input("[bold]You:[/bold] ").strip()
            if message.lower() in ("quit", "exit"):
                break
            if not message:
                continue

            try:
                response = await client.post(
                    url,
                    json={
                        "message": message,
                        "mode": args.mode,
                        "topic": args.topic,
                        "conversationHistory": history,
                        "userLevel": args.user_level,
                        "coachStyle": args.coach_style,
                        "explainInEnglish": args.explain_in_english,
                        "targetLanguage": args.target_language,
                    },
                )
                result = response.json()
            except httpx.ConnectError:
                console.print("[red]Could not connect to tutor server. Is it running?[/red]")
                return

            if "error" in result:
                console.print(f"[red]Error ({response.status_code}): {result['error']}[/red]")
                continue

            console.print(Markdown(result["reply"]))
            console.print()

            history.append({"role": "user", "content": message})
            history.append({"role": "assistant", "content": result["reply"]})
            history = history[-CONVERSATION_HISTORY_LIMIT:]


def main() -> None:
    args = sp.parse(Args)
    asyncio.run(chat(args))


if __name__ == "__main__":
    main()
