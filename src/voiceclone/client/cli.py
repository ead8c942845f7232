"""Command-line front end for the voiceclone API.

Usage:
    voiceclone login you@example.com secret
    export VOICECLONE_TOKEN=...
    voiceclone create-project "Demo"
    voiceclone record <project-id> --name "Sample A"
    voiceclone generate <project-id> "Hello world"
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from voiceclone.client.api_client import APIClient, APIError
from voiceclone.client.recorder import MicrophoneAccessError
from voiceclone.client.views import DashboardView, Notification, ProjectDetailView

logger = logging.getLogger(__name__)


def print_notification(notification: Notification) -> None:
    stream = sys.stderr if notification.variant == "destructive" else sys.stdout
    print(f"{notification.title}: {notification.description}", file=stream)


async def _register(api: APIClient, args: argparse.Namespace) -> int:
    user = await api.register(args.email, args.password)
    print(f"Registered {user['email']} ({user['id']})")
    return 0


async def _login(api: APIClient, args: argparse.Namespace) -> int:
    print(await api.login(args.email, args.password))
    return 0


async def _projects(api: APIClient, args: argparse.Namespace) -> int:
    view = DashboardView(api, notify=print_notification)
    await view.refresh()
    print(view.render())
    return 0


async def _create_project(api: APIClient, args: argparse.Namespace) -> int:
    view = DashboardView(api, notify=print_notification)
    if not args.name.strip():
        print("Project name is required", file=sys.stderr)
        return 2
    created = await view.create_project(args.name, args.description or "")
    if created:
        print(view.render())
    return 0 if created else 1


async def _show(api: APIClient, args: argparse.Namespace) -> int:
    view = ProjectDetailView(api, args.project_id, notify=print_notification)
    await view.refresh()
    print(view.render())
    return 0 if view.project else 1


async def _record(api: APIClient, args: argparse.Namespace) -> int:
    view = ProjectDetailView(api, args.project_id, notify=print_notification)
    panel = view.recorder_panel
    recorder = panel.recorder

    try:
        recorder.start()
    except MicrophoneAccessError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    await asyncio.to_thread(input, "Recording... press Enter to stop. ")
    recorder.stop()
    print(panel.render())

    if args.play:
        recorder.play()

    panel.sample_name = args.name
    if not await panel.upload():
        return 1
    print(view.render())
    return 0


async def _generate(api: APIClient, args: argparse.Namespace) -> int:
    view = ProjectDetailView(api, args.project_id, notify=print_notification)
    await view.refresh()
    if view.project is None:
        return 1
    view.input_text = args.text
    if not await view.generate_speech():
        return 1
    print(view.render())
    return 0


async def _download(api: APIClient, args: argparse.Namespace) -> int:
    path = await api.download_audio(args.url, Path(args.destination))
    print(f"Saved {path}")
    return 0


COMMANDS = {
    "register": _register,
    "login": _login,
    "projects": _projects,
    "create-project": _create_project,
    "show": _show,
    "record": _record,
    "generate": _generate,
    "download": _download,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="voiceclone", description="Voice cloning projects client")
    parser.add_argument("--api-url", help="API base URL (default: $VOICECLONE_API_URL)")
    parser.add_argument("--token", help="Bearer token (default: $VOICECLONE_TOKEN)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("register", "login"):
        p = sub.add_parser(name)
        p.add_argument("email")
        p.add_argument("password")

    sub.add_parser("projects", help="List your projects")

    p = sub.add_parser("create-project", help="Create a new project")
    p.add_argument("name")
    p.add_argument("--description", default="")

    p = sub.add_parser("show", help="Show a project with its samples and generated audio")
    p.add_argument("project_id")

    p = sub.add_parser("record", help="Record a voice sample from the microphone and upload it")
    p.add_argument("project_id")
    p.add_argument("--name", required=True, help="Sample name")
    p.add_argument("--play", action="store_true", help="Play the sample back before uploading")

    p = sub.add_parser("generate", help="Generate speech from text")
    p.add_argument("project_id")
    p.add_argument("text")

    p = sub.add_parser("download", help="Download a stored audio file")
    p.add_argument("url")
    p.add_argument("destination")

    return parser


async def run(args: argparse.Namespace, api: APIClient | None = None) -> int:
    handler = COMMANDS[args.command]
    async with api or APIClient(base_url=args.api_url, token=args.token) as client:
        try:
            return await handler(client, args)
        except APIError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
