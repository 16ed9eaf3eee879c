#!/usr/bin/env python3
#
# wgmanager/cli.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Terminal console for the WireGuard management API."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import getpass
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional

import qrcode

from .api import APIClient, InvalidURLError
from .controllers import PeerCollectionController, SessionController
from .models import Peer
from .store import CredentialStore, FileCredentialStore, Vault
from .utils.config import Config, ConfigValidationError, get_config
from .utils.log import setup_logging
from .utils.time import utcnow

_log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


@dataclass
class Runtime:
	"""Wired-up collaborators for one CLI invocation."""
	client: APIClient
	store: CredentialStore
	session: SessionController
	peers: PeerCollectionController


def build_runtime(cfg: Config) -> Runtime:
	vault = Vault(cfg.secret_key) if cfg.secret_key else None
	store = FileCredentialStore(cfg.credentials_path, vault)
	client = APIClient(cfg.base_url, store, timeout=cfg.request_timeout)
	return Runtime(
		client=client,
		store=store,
		session=SessionController(client, store),
		peers=PeerCollectionController(client),
	)


def _err(message: str) -> None:
	print(f"Error: {message}", file=sys.stderr)


def _peer_row(peer: Peer) -> str:
	now = utcnow()
	return (
		f"{peer.id:>4}  {peer.name[:24]:<24}  {peer.short_ip_address:<15}  "
		f"{peer.status_text(now):<12}  rx {peer.formatted_rx:>10}  tx {peer.formatted_tx:>10}  "
		f"{peer.last_seen_text(now)}"
	)


def _print_peer(peer: Peer) -> None:
	now = utcnow()
	print(f"Name:          {peer.name}")
	print(f"ID:            {peer.id}")
	if peer.description:
		print(f"Description:   {peer.description}")
	if peer.device_name:
		print(f"Device:        {peer.device_name}")
	if peer.device_identifier:
		print(f"Device ID:     {peer.device_identifier}")
	print(f"Status:        {peer.status_text(now)}")
	print(f"Address:       {peer.ip_address}")
	print(f"Allowed IPs:   {peer.allowed_ips}")
	print(f"Public key:    {peer.public_key}")
	print(f"Keepalive:     {peer.persistent_keepalive}s")
	print(f"Received:      {peer.formatted_rx}")
	print(f"Sent:          {peer.formatted_tx}")
	print(f"Total:         {peer.formatted_total_data}")
	print(f"Last seen:     {peer.last_seen_text(now)}")
	print(f"Created:       {peer.created_at:%Y-%m-%d %H:%M}")


def _report(controller_error: Optional[str]) -> int:
	if controller_error:
		_err(controller_error)
		return EXIT_FAILED
	return EXIT_OK


async def _find_peer(rt: Runtime, peer_id: int) -> Optional[Peer]:
	peer = rt.peers.find(peer_id)
	if peer is not None:
		return peer
	await rt.peers.refresh()
	peer = rt.peers.find(peer_id)
	if peer is None and not rt.peers.error_message:
		_err(f"Peer {peer_id} not found")
	return peer


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

async def cmd_login(args: argparse.Namespace, rt: Runtime) -> int:
	username = args.username or rt.session.last_username
	if not username:
		username = input("Username: ").strip()
	password = args.password if args.password is not None else getpass.getpass("Password: ")
	if not await rt.session.login(username, password):
		return _report(rt.session.error_message)
	user = rt.session.current_user
	print(f"Logged in as {user.display_name if user else username}")
	return EXIT_OK


async def cmd_logout(args: argparse.Namespace, rt: Runtime) -> int:
	rt.session.logout()
	print("Logged out")
	return EXIT_OK


async def cmd_whoami(args: argparse.Namespace, rt: Runtime) -> int:
	if not rt.session.is_authenticated:
		_err("Not logged in")
		return EXIT_FAILED
	user = await rt.session.fetch_current_user()
	if user is None:
		_err("Could not load the current user")
		return EXIT_FAILED
	role = "admin" if user.is_admin else "user"
	print(f"{user.username} <{user.email}> ({role}, {'active' if user.is_active else 'inactive'})")
	return EXIT_OK


async def cmd_health(args: argparse.Namespace, rt: Runtime) -> int:
	healthy = await rt.client.health_check()
	print(f"{rt.client.base_url}: {'healthy' if healthy else 'unreachable'}")
	return EXIT_OK if healthy else EXIT_FAILED


async def cmd_stats(args: argparse.Namespace, rt: Runtime) -> int:
	await rt.peers.refresh_stats()
	stats = rt.peers.server_stats
	if stats is None:
		return _report(rt.peers.error_message)
	if stats.interface:
		print(f"Interface:     {stats.interface}")
	if stats.server_uptime:
		print(f"Uptime:        {stats.server_uptime}")
	print(f"Peers:         {stats.total_peers} total, {stats.active_peers} active, {stats.online_peers} online")
	print(f"Enabled:       {stats.enabled_peers} enabled, {stats.disabled_peers} disabled")
	print(f"Traffic:       rx {stats.total_rx_formatted}, tx {stats.total_tx_formatted}")
	return EXIT_OK


async def cmd_peers_list(args: argparse.Namespace, rt: Runtime) -> int:
	await rt.peers.refresh()
	if rt.peers.error_message and not rt.peers.peers:
		return _report(rt.peers.error_message)
	if not rt.peers.peers:
		print("No peers.")
	for peer in rt.peers.peers:
		print(_peer_row(peer))
	return _report(rt.peers.error_message)


async def cmd_peers_show(args: argparse.Namespace, rt: Runtime) -> int:
	peer = await _find_peer(rt, args.peer_id)
	if peer is None:
		return _report(rt.peers.error_message) or EXIT_FAILED
	_print_peer(peer)
	return EXIT_OK


async def cmd_peers_create(args: argparse.Namespace, rt: Runtime) -> int:
	peer = await rt.peers.create(
		args.name,
		description=args.description,
		device_name=args.device_name,
		device_identifier=args.device_identifier,
	)
	if peer is None:
		return _report(rt.peers.error_message)
	print(f"Created peer {peer.id} ({peer.name}) at {peer.ip_address}")
	return EXIT_OK


async def cmd_peers_update(args: argparse.Namespace, rt: Runtime) -> int:
	peer = await _find_peer(rt, args.peer_id)
	if peer is None:
		return _report(rt.peers.error_message) or EXIT_FAILED
	updated = await rt.peers.update(
		peer,
		name=args.name,
		description=args.description,
		is_enabled=args.enabled,
		device_name=args.device_name,
	)
	if updated is None:
		return _report(rt.peers.error_message)
	print(f"Updated peer {updated.id} ({updated.name})")
	return EXIT_OK


async def cmd_peers_toggle(args: argparse.Namespace, rt: Runtime) -> int:
	peer = await _find_peer(rt, args.peer_id)
	if peer is None:
		return _report(rt.peers.error_message) or EXIT_FAILED
	updated = await rt.peers.toggle(peer)
	if updated is None:
		return _report(rt.peers.error_message)
	print(f"Peer {updated.id} ({updated.name}) is now {'enabled' if updated.is_enabled else 'disabled'}")
	return EXIT_OK


async def cmd_peers_delete(args: argparse.Namespace, rt: Runtime) -> int:
	peer = await _find_peer(rt, args.peer_id)
	if peer is None:
		return _report(rt.peers.error_message) or EXIT_FAILED
	if not args.yes:
		answer = input(f"Delete peer {peer.id} ({peer.name})? [y/N] ").strip().lower()
		if answer not in ("y", "yes"):
			print("Aborted")
			return EXIT_FAILED
	if not await rt.peers.delete(peer):
		return _report(rt.peers.error_message)
	print(f"Deleted peer {peer.id}")
	return EXIT_OK


async def cmd_peers_config(args: argparse.Namespace, rt: Runtime) -> int:
	config = await rt.peers.fetch_config(args.peer_id)
	if config is None:
		return _report(rt.peers.error_message)
	if args.output:
		args.output.write_text(config.config_text, encoding="utf-8")
		args.output.chmod(0o600)
		print(f"Config written to {args.output}")
	if args.png:
		png = config.qr_png_bytes()
		if png is not None:
			args.png.write_bytes(png)
		else:
			qrcode.make(config.config_text).save(str(args.png))
		print(f"QR code written to {args.png}")
	if args.qr:
		print(config.qr_ascii())
	if not (args.output or args.png or args.qr):
		print(config.config_text, end="" if config.config_text.endswith("\n") else "\n")
	return EXIT_OK


async def cmd_peers_stats(args: argparse.Namespace, rt: Runtime) -> int:
	stats = await rt.peers.fetch_peer_stats(args.peer_id)
	if stats is None:
		return _report(rt.peers.error_message)
	print(f"Peer:          {stats.name} ({stats.peer_id})")
	print(f"Address:       {stats.ip_address}")
	print(f"Status:        {'online' if stats.is_online else 'offline'}{'' if stats.is_enabled else ', disabled'}")
	print(f"Received:      {stats.total_rx_formatted}")
	print(f"Sent:          {stats.total_tx_formatted}")
	print(f"Last handshake: {stats.last_handshake_ago or 'never'}")
	return EXIT_OK


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="wgmanager", description="WireGuard management console")
	parser.add_argument("--base-url", help="Management API base URL (overrides WGMANAGER_BASE_URL)")
	parser.add_argument("--log-level", help="Log level (overrides LOG_LEVEL)")
	sub = parser.add_subparsers(dest="command", required=True)

	p = sub.add_parser("login", help="Log in and store the access token")
	p.add_argument("username", nargs="?")
	p.add_argument("--password", help="Password (prompted when omitted)")
	p.set_defaults(handler=cmd_login)

	sub.add_parser("logout", help="Forget the stored token").set_defaults(handler=cmd_logout)
	sub.add_parser("whoami", help="Show the logged-in user").set_defaults(handler=cmd_whoami)
	sub.add_parser("health", help="Probe the server").set_defaults(handler=cmd_health)
	sub.add_parser("stats", help="Show server statistics").set_defaults(handler=cmd_stats)

	peers = sub.add_parser("peers", help="Manage peers")
	psub = peers.add_subparsers(dest="peers_command", required=True)

	psub.add_parser("list", help="List peers").set_defaults(handler=cmd_peers_list)

	p = psub.add_parser("show", help="Show one peer")
	p.add_argument("peer_id", type=int)
	p.set_defaults(handler=cmd_peers_show)

	p = psub.add_parser("create", help="Create a peer")
	p.add_argument("name")
	p.add_argument("--description")
	p.add_argument("--device-name")
	p.add_argument("--device-identifier")
	p.set_defaults(handler=cmd_peers_create)

	p = psub.add_parser("update", help="Change peer fields")
	p.add_argument("peer_id", type=int)
	p.add_argument("--name")
	p.add_argument("--description")
	p.add_argument("--device-name")
	group = p.add_mutually_exclusive_group()
	group.add_argument("--enable", dest="enabled", action="store_const", const=True)
	group.add_argument("--disable", dest="enabled", action="store_const", const=False)
	p.set_defaults(handler=cmd_peers_update, enabled=None)

	p = psub.add_parser("toggle", help="Enable or disable a peer")
	p.add_argument("peer_id", type=int)
	p.set_defaults(handler=cmd_peers_toggle)

	p = psub.add_parser("delete", help="Delete a peer")
	p.add_argument("peer_id", type=int)
	p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
	p.set_defaults(handler=cmd_peers_delete)

	p = psub.add_parser("config", help="Fetch the client configuration")
	p.add_argument("peer_id", type=int)
	p.add_argument("--qr", action="store_true", help="Print a terminal QR code")
	p.add_argument("--png", type=Path, help="Write the QR code image to this file")
	p.add_argument("-o", "--output", type=Path, help="Write the config file here")
	p.set_defaults(handler=cmd_peers_config)

	p = psub.add_parser("stats", help="Show traffic statistics of one peer")
	p.add_argument("peer_id", type=int)
	p.set_defaults(handler=cmd_peers_stats)

	return parser


async def _run(handler: Callable[[argparse.Namespace, Runtime], Awaitable[int]], args: argparse.Namespace, rt: Runtime) -> int:
	try:
		return await handler(args, rt)
	finally:
		await rt.client.aclose()


def main(argv: Optional[list[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)

	try:
		cfg = get_config()
	except ConfigValidationError as exc:
		setup_logging("INFO")
		_err(str(exc))
		return EXIT_USAGE
	if args.base_url:
		cfg = dataclasses.replace(cfg, base_url=args.base_url)
	setup_logging(args.log_level or cfg.log_level)
	_log.debug("Using management API at %s", cfg.base_url)

	try:
		rt = build_runtime(cfg)
	except InvalidURLError:
		_err(f"Invalid base URL: {cfg.base_url!r}")
		return EXIT_USAGE

	try:
		return asyncio.run(_run(args.handler, args, rt))
	except KeyboardInterrupt:
		return EXIT_FAILED
