"""Wire-level integration tests for the MCP stdio contract."""

from __future__ import annotations

import json
import subprocess
import sys

INITIALIZE = [
    {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "initialize",
        "params": {
            "protocolVersion": "2025-03-26",
            "capabilities": {},
            "clientInfo": {"name": "pytest", "version": "0"},
        },
    },
    {"jsonrpc": "2.0", "method": "notifications/initialized"},
]


def _run_mcp_exchange(env: dict[str, str], messages: list[dict]) -> list[dict]:
    proc = subprocess.Popen(
        [sys.executable, "-m", "codelink.server"],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env,
    )

    assert proc.stdin is not None
    assert proc.stdout is not None
    assert proc.stderr is not None

    for message in messages:
        proc.stdin.write(json.dumps(message) + "\n")
    proc.stdin.flush()

    # Keep stdin open until every request has been answered; closing it early
    # tears down the receive loop and drops in-flight tool responses.
    expected_ids = frozenset(msg["id"] for msg in messages if "id" in msg)
    responses: list[dict] = []
    seen_ids: set = set()
    while seen_ids < expected_ids:
        line = proc.stdout.readline()
        if not line:  # server exited before answering all requests
            break
        stripped = line.strip()
        if stripped:
            resp = json.loads(stripped)
            responses.append(resp)
            rid = resp.get("id")
            if rid is not None:
                seen_ids.add(rid)

    proc.stdin.close()
    proc.stderr.read()  # drain for reliable process shutdown
    proc.wait(timeout=10)
    proc.stdout.close()
    proc.stderr.close()

    return responses


def _response(responses: list[dict], rid: int) -> dict:
    return next(response for response in responses if response.get("id") == rid)


def test_initialize_and_tools_list_contract(subprocess_env: dict[str, str]) -> None:
    responses = _run_mcp_exchange(
        subprocess_env,
        [*INITIALIZE, {"jsonrpc": "2.0", "id": 2, "method": "tools/list", "params": {}}],
    )

    init_result = _response(responses, 1)["result"]
    assert init_result["serverInfo"]["name"] == "codelink"
    assert "tools" in init_result["capabilities"]

    tools = {tool["name"]: tool for tool in _response(responses, 2)["result"]["tools"]}
    assert set(tools) == {"copy_code_link", "copy_code_link_force_refresh", "clear_cache"}

    for name in ("copy_code_link", "copy_code_link_force_refresh"):
        schema = tools[name]["inputSchema"]
        assert schema["type"] == "object"
        assert {"file_path", "start_line", "end_line", "selected_text"} <= set(
            schema["required"]
        )
        assert "workspace_root" not in schema["required"]
        assert schema["properties"]["start_line"]["type"] == "integer"

    assert "project_name" not in tools["clear_cache"]["inputSchema"].get("required", [])


def test_error_serializes_to_structured_tool_error(subprocess_env: dict[str, str]) -> None:
    responses = _run_mcp_exchange(
        subprocess_env,
        [
            *INITIALIZE,
            {
                "jsonrpc": "2.0",
                "id": 2,
                "method": "tools/call",
                "params": {
                    "name": "copy_code_link",
                    "arguments": {
                        "file_path": "/repo/a.py",
                        "start_line": 0,
                        "end_line": 0,
                        "selected_text": "",
                    },
                },
            },
        ],
    )

    result = _response(responses, 2)["result"]
    assert result["isError"] is True

    text_payload = result["content"][0]["text"]
    assert "Error executing tool" not in text_payload

    parsed = json.loads(text_payload)
    assert parsed["error"]["code"] == "EMPTY_SELECTION"
    assert parsed["error"]["recoverable"] is False


def test_clear_cache_wire_success(subprocess_env: dict[str, str]) -> None:
    responses = _run_mcp_exchange(
        subprocess_env,
        [
            *INITIALIZE,
            {
                "jsonrpc": "2.0",
                "id": 2,
                "method": "tools/call",
                "params": {"name": "clear_cache", "arguments": {}},
            },
        ],
    )

    result = _response(responses, 2)["result"]
    assert result.get("isError") is not True
    parsed = json.loads(result["content"][0]["text"])
    assert parsed == {"cleared": 0, "message": "Cache cleared"}


def test_clear_cache_blank_project_is_tool_error(subprocess_env: dict[str, str]) -> None:
    responses = _run_mcp_exchange(
        subprocess_env,
        [
            *INITIALIZE,
            {
                "jsonrpc": "2.0",
                "id": 2,
                "method": "tools/call",
                "params": {"name": "clear_cache", "arguments": {"project_name": ""}},
            },
        ],
    )

    result = _response(responses, 2)["result"]
    assert result["isError"] is True
    parsed = json.loads(result["content"][0]["text"])
    assert parsed["error"]["code"] == "INVALID_INPUT"
