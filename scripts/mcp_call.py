import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.types import TextContent


def print_result(result: Any, raw: bool) -> None:
	structured = getattr(result, "structuredContent", None)
	if structured is not None:
		# some server versions wrap dict returns as {"result": {...}}
		payload = structured
		if isinstance(structured, dict) and "status" not in structured and "result" in structured:
			payload = structured["result"]
		if not raw and isinstance(payload, dict) and ("text" in payload or payload.get("status") == "error"):
			if "text" in payload:
				print(payload["text"])
			if payload.get("status") == "error":
				print(f"[{payload.get('code')}] {payload.get('error')}", file=sys.stderr)
			return
		print(json.dumps(payload, ensure_ascii=False, indent=2))
		return
	# fallback to textual content
	texts = []
	for c in getattr(result, "content", []) or []:
		if isinstance(c, TextContent):
			texts.append(c.text)
	print("\n".join(texts))


async def run_call(session: ClientSession, tool: str, args: Dict[str, Any], raw: bool) -> None:
	result = await session.call_tool(tool, arguments=args)
	print_result(result, raw)


def parse_args() -> argparse.Namespace:
	parser = argparse.ArgumentParser(
		description="Call DOM Inspector MCP tools over stdio",
		epilog=(
			"Examples:\n"
			"  scripts/mcp_call.py browser_navigate '{\"url\": \"https://example.com\"}'\n"
			"  scripts/mcp_call.py batch '[{\"tool\":\"browser_navigate\",\"args\":{\"url\":\"https://example.com\"}},"
			" {\"tool\":\"inspect_dom\",\"args\":{}}]'"
		),
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	parser.add_argument("tool", help="Tool name, or 'batch' for a JSON array of calls")
	parser.add_argument("args", nargs="?", default="{}", help="JSON arguments")
	parser.add_argument("--raw", action="store_true", help="Print the full JSON response")
	parser.add_argument("--headed", action="store_true", help="Show the browser window")
	parser.add_argument("--config", help="Server config file")
	return parser.parse_args()


async def main() -> None:
	opts = parse_args()
	args = json.loads(opts.args)

	server_args = ["-m", "dom_inspector"]
	if opts.headed:
		server_args.append("--headed")
	if opts.config:
		server_args += ["--config", opts.config]
	server_params = StdioServerParameters(command=sys.executable, args=server_args)

	async with stdio_client(server_params) as (read, write):
		async with ClientSession(read, write) as session:
			await session.initialize()
			if opts.tool == "batch":
				calls: List[Dict[str, Any]] = args if isinstance(args, list) else []
				for call in calls:
					print(f"=== {call.get('tool', '')} ===")
					await run_call(session, call.get("tool", ""), call.get("args", {}), opts.raw)
				return
			await run_call(session, opts.tool, args, opts.raw)


if __name__ == "__main__":
	asyncio.run(main())
