"""
Static n8n workflow documents: test workflows and importable templates.

Workflows are plain JSON-compatible dicts in n8n's export format
(``name``, ``nodes``, ``connections``). The tables are never handed out
directly; callers always receive deep copies.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

DEFAULT_WORKFLOW_TYPE = "webhook_to_slack"
DEFAULT_TEMPLATE_NAME = "webhook_slack"


def _node(
    node_id: str,
    name: str,
    node_type: str,
    type_version: float,
    x: int,
    parameters: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a node laid out on the canvas's y=300 row."""
    return {
        "id": node_id,
        "name": name,
        "type": node_type,
        "typeVersion": type_version,
        "position": [x, 300],
        "parameters": parameters or {},
    }


def _chain(*names: str) -> dict[str, Any]:
    """Connect the named nodes one after another on their main outputs."""
    return {
        source: {"main": [[{"node": target, "type": "main", "index": 0}]]}
        for source, target in zip(names, names[1:])
    }


def _webhook_parameters(path: str) -> dict[str, Any]:
    return {"httpMethod": "POST", "path": path, "responseMode": "responseNode"}


_SAMPLE_DATA_CODE = """// Generate sample data
const data = [];
for (let i = 0; i < 5; i++) {
  data.push({
    id: i + 1,
    name: 'Item ' + (i + 1),
    value: Math.random() * 100,
    timestamp: new Date().toISOString()
  });
}
return data;"""

# Test workflow bodies keyed by workflow type; the name is filled in per call.
_TEST_WORKFLOWS: MappingProxyType[str, dict[str, Any]] = MappingProxyType(
    {
        "webhook_to_slack": {
            "nodes": [
                _node(
                    "webhook_1",
                    "Webhook",
                    "n8n-nodes-base.webhook",
                    1,
                    250,
                    _webhook_parameters("test-webhook"),
                ),
                _node(
                    "slack_1",
                    "Slack",
                    "n8n-nodes-base.slack",
                    1,
                    450,
                    {
                        "resource": "message",
                        "operation": "post",
                        "channel": "#general",
                        "text": '=Test message from n8n workflow: {{$json.message || "Hello from webhook!"}}',
                    },
                ),
                _node(
                    "respond_1",
                    "Respond to Webhook",
                    "n8n-nodes-base.respondToWebhook",
                    1,
                    650,
                    {
                        "responseCode": 200,
                        "responseData": "json",
                        "responseBody": '={"status": "success", "message": "Workflow executed successfully"}',
                    },
                ),
            ],
            "connections": _chain("Webhook", "Slack", "Respond to Webhook"),
        },
        "manual_to_http": {
            "nodes": [
                _node(
                    "manual_1",
                    "Manual Trigger",
                    "n8n-nodes-base.manualTrigger",
                    1,
                    250,
                ),
                _node(
                    "http_1",
                    "HTTP Request",
                    "n8n-nodes-base.httpRequest",
                    4.2,
                    450,
                    {
                        "method": "GET",
                        "url": "https://httpbin.org/json",
                        "responseFormat": "json",
                    },
                ),
                _node(
                    "set_1",
                    "Set",
                    "n8n-nodes-base.set",
                    3.4,
                    650,
                    {
                        "values": {
                            "string": [
                                {
                                    "name": "processed_at",
                                    "value": "={{ new Date().toISOString() }}",
                                },
                                {"name": "status", "value": "completed"},
                            ]
                        }
                    },
                ),
            ],
            "connections": _chain("Manual Trigger", "HTTP Request", "Set"),
        },
        "schedule_to_email": {
            "nodes": [
                _node(
                    "schedule_1",
                    "Schedule Trigger",
                    "n8n-nodes-base.scheduleTrigger",
                    1,
                    250,
                    {"rule": {"interval": [{"field": "minute", "value": 30}]}},
                ),
                _node(
                    "email_1",
                    "Email",
                    "n8n-nodes-base.emailSend",
                    2,
                    450,
                    {
                        "toEmail": "test@example.com",
                        "subject": "Scheduled Test Email",
                        "message": "This is a test email sent by n8n workflow at {{ new Date().toISOString() }}",
                    },
                ),
            ],
            "connections": _chain("Schedule Trigger", "Email"),
        },
        "ai_agent": {
            "nodes": [
                _node(
                    "webhook_1",
                    "Webhook",
                    "n8n-nodes-base.webhook",
                    1,
                    250,
                    _webhook_parameters("ai-chat"),
                ),
                _node(
                    "ai_1",
                    "AI Agent",
                    "@n8n/n8n-nodes-langchain.agent",
                    1,
                    450,
                    {
                        "text": "={{ $json.query }}",
                        "systemMessage": "You are a helpful AI assistant. Answer questions clearly and concisely.",
                    },
                ),
                _node(
                    "respond_1",
                    "Respond to Webhook",
                    "n8n-nodes-base.respondToWebhook",
                    1,
                    650,
                    {
                        "responseCode": 200,
                        "responseData": "json",
                        "responseBody": '={"response": "{{ $json.text }}"}',
                    },
                ),
            ],
            "connections": _chain("Webhook", "AI Agent", "Respond to Webhook"),
        },
        "data_processing": {
            "nodes": [
                _node(
                    "manual_1",
                    "Manual Trigger",
                    "n8n-nodes-base.manualTrigger",
                    1,
                    250,
                ),
                _node(
                    "code_1",
                    "Code",
                    "n8n-nodes-base.code",
                    2,
                    450,
                    {"jsCode": _SAMPLE_DATA_CODE},
                ),
                _node(
                    "filter_1",
                    "Filter",
                    "n8n-nodes-base.if",
                    2,
                    650,
                    {
                        "conditions": {
                            "number": [
                                {
                                    "value1": "={{ $json.value }}",
                                    "operation": "larger",
                                    "value2": 50,
                                }
                            ]
                        }
                    },
                ),
                _node(
                    "set_1",
                    "Set",
                    "n8n-nodes-base.set",
                    3.4,
                    850,
                    {
                        "values": {
                            "string": [
                                {"name": "processed", "value": "true"},
                                {
                                    "name": "filtered_count",
                                    "value": "={{ $json.length }}",
                                },
                            ]
                        }
                    },
                ),
            ],
            "connections": _chain("Manual Trigger", "Code", "Filter", "Set"),
        },
    }
)

WORKFLOW_TYPES: tuple[str, ...] = tuple(_TEST_WORKFLOWS)


@dataclass(frozen=True)
class WorkflowTemplate:
    """A pre-built workflow plus the metadata shown next to it."""

    name: str
    description: str
    category: str
    difficulty: str
    workflow: dict[str, Any]

    @property
    def node_count(self) -> int:
        return len(self.workflow["nodes"])


_TEMPLATES: MappingProxyType[str, WorkflowTemplate] = MappingProxyType(
    {
        "webhook_slack": WorkflowTemplate(
            name="Webhook to Slack Notification",
            description="Simple webhook that sends notifications to Slack",
            category="Communication",
            difficulty="Beginner",
            workflow={
                "name": "Webhook to Slack",
                "nodes": [
                    _node(
                        "webhook_1",
                        "Webhook",
                        "n8n-nodes-base.webhook",
                        1,
                        250,
                        _webhook_parameters("slack-notify"),
                    ),
                    _node(
                        "slack_1",
                        "Slack",
                        "n8n-nodes-base.slack",
                        1,
                        450,
                        {
                            "resource": "message",
                            "operation": "post",
                            "channel": "#general",
                            "text": '=New notification: {{$json.message || "Hello from webhook!"}}',
                        },
                    ),
                    _node(
                        "respond_1",
                        "Respond to Webhook",
                        "n8n-nodes-base.respondToWebhook",
                        1,
                        650,
                        {
                            "responseCode": 200,
                            "responseData": "json",
                            "responseBody": '={"status": "sent"}',
                        },
                    ),
                ],
                "connections": _chain("Webhook", "Slack", "Respond to Webhook"),
            },
        ),
        "email_processor": WorkflowTemplate(
            name="Email Processing Workflow",
            description="Process incoming emails and extract data",
            category="Data Processing",
            difficulty="Intermediate",
            workflow={
                "name": "Email Processor",
                "nodes": [
                    _node(
                        "email_1",
                        "Email Read IMAP",
                        "n8n-nodes-base.emailReadImap",
                        1,
                        250,
                        {"mailbox": "INBOX", "readToEnd": True},
                    ),
                    _node(
                        "filter_1",
                        "Filter",
                        "n8n-nodes-base.if",
                        2,
                        450,
                        {
                            "conditions": {
                                "string": [
                                    {
                                        "value1": "={{ $json.subject }}",
                                        "operation": "contains",
                                        "value2": "important",
                                    }
                                ]
                            }
                        },
                    ),
                    _node(
                        "set_1",
                        "Set",
                        "n8n-nodes-base.set",
                        3.4,
                        650,
                        {
                            "values": {
                                "string": [
                                    {
                                        "name": "processed_at",
                                        "value": "={{ new Date().toISOString() }}",
                                    },
                                    {"name": "priority", "value": "high"},
                                ]
                            }
                        },
                    ),
                    _node(
                        "slack_1",
                        "Slack",
                        "n8n-nodes-base.slack",
                        1,
                        850,
                        {
                            "resource": "message",
                            "operation": "post",
                            "channel": "#alerts",
                            "text": "=Important email received: {{$json.subject}}",
                        },
                    ),
                ],
                "connections": _chain("Email Read IMAP", "Filter", "Set", "Slack"),
            },
        ),
        "data_sync": WorkflowTemplate(
            name="Spreadsheet to Airtable Sync",
            description="Copy new Google Sheets rows into an Airtable base on a schedule",
            category="Data",
            difficulty="Intermediate",
            workflow={
                "name": "Data Sync",
                "nodes": [
                    _node(
                        "schedule_1",
                        "Schedule Trigger",
                        "n8n-nodes-base.scheduleTrigger",
                        1,
                        250,
                        {"rule": {"interval": [{"field": "hours", "value": 1}]}},
                    ),
                    _node(
                        "sheets_1",
                        "Google Sheets",
                        "n8n-nodes-base.googleSheets",
                        4,
                        450,
                        {
                            "operation": "read",
                            "documentId": "={{ $env.SYNC_SHEET_ID }}",
                            "sheetName": "Sheet1",
                        },
                    ),
                    _node(
                        "set_1",
                        "Set",
                        "n8n-nodes-base.set",
                        3.4,
                        650,
                        {
                            "values": {
                                "string": [
                                    {
                                        "name": "synced_at",
                                        "value": "={{ new Date().toISOString() }}",
                                    }
                                ]
                            }
                        },
                    ),
                    _node(
                        "airtable_1",
                        "Airtable",
                        "n8n-nodes-base.airtable",
                        2,
                        850,
                        {
                            "operation": "upsert",
                            "base": "={{ $env.SYNC_AIRTABLE_BASE }}",
                            "table": "Records",
                        },
                    ),
                ],
                "connections": _chain(
                    "Schedule Trigger", "Google Sheets", "Set", "Airtable"
                ),
            },
        ),
        "ai_chatbot": WorkflowTemplate(
            name="AI Chatbot",
            description="Answer chat messages with an AI agent behind a webhook",
            category="AI",
            difficulty="Advanced",
            workflow={
                "name": "AI Chatbot",
                "nodes": [
                    _node(
                        "webhook_1",
                        "Webhook",
                        "n8n-nodes-base.webhook",
                        1,
                        250,
                        _webhook_parameters("chatbot"),
                    ),
                    _node(
                        "ai_1",
                        "AI Agent",
                        "@n8n/n8n-nodes-langchain.agent",
                        1,
                        450,
                        {
                            "text": "={{ $json.message }}",
                            "systemMessage": "You are a friendly support assistant. Keep answers short.",
                        },
                    ),
                    _node(
                        "respond_1",
                        "Respond to Webhook",
                        "n8n-nodes-base.respondToWebhook",
                        1,
                        650,
                        {
                            "responseCode": 200,
                            "responseData": "json",
                            "responseBody": '={"reply": "{{ $json.output }}"}',
                        },
                    ),
                ],
                "connections": _chain("Webhook", "AI Agent", "Respond to Webhook"),
            },
        ),
        "file_processor": WorkflowTemplate(
            name="File Processing Workflow",
            description="Parse spreadsheets dropped into a folder and tag each row",
            category="Files",
            difficulty="Intermediate",
            workflow={
                "name": "File Processor",
                "nodes": [
                    _node(
                        "trigger_1",
                        "Local File Trigger",
                        "n8n-nodes-base.localFileTrigger",
                        1,
                        250,
                        {"triggerOn": "folder", "path": "/data/inbox"},
                    ),
                    _node(
                        "read_1",
                        "Read Binary File",
                        "n8n-nodes-base.readBinaryFile",
                        1,
                        450,
                        {"filePath": "={{ $json.path }}"},
                    ),
                    _node(
                        "sheet_1",
                        "Spreadsheet File",
                        "n8n-nodes-base.spreadsheetFile",
                        2,
                        650,
                        {"operation": "fromFile"},
                    ),
                    _node(
                        "set_1",
                        "Set",
                        "n8n-nodes-base.set",
                        3.4,
                        850,
                        {
                            "values": {
                                "string": [
                                    {"name": "source", "value": "={{ $json.fileName }}"}
                                ]
                            }
                        },
                    ),
                ],
                "connections": _chain(
                    "Local File Trigger",
                    "Read Binary File",
                    "Spreadsheet File",
                    "Set",
                ),
            },
        ),
    }
)

TEMPLATE_NAMES: tuple[str, ...] = tuple(_TEMPLATES)


def build_test_workflow(workflow_type: str, name: str) -> dict[str, Any] | None:
    """
    Return a fresh copy of the test workflow for ``workflow_type`` named ``name``.

    Returns None for an unknown workflow type.
    """
    body = _TEST_WORKFLOWS.get(workflow_type)
    if body is None:
        return None
    return {"name": name, **copy.deepcopy(body)}


def get_template(template_name: str) -> WorkflowTemplate | None:
    """Return a copy of the named template, or None if there is none."""
    template = _TEMPLATES.get(template_name)
    if template is None:
        return None
    return WorkflowTemplate(
        name=template.name,
        description=template.description,
        category=template.category,
        difficulty=template.difficulty,
        workflow=copy.deepcopy(template.workflow),
    )
