"""Shared constants for documentation prompting."""

from __future__ import annotations

CUSTOM_TASK = "custom"

# key -> (display name, description, template file)
TASK_SPECS: dict[str, tuple[str, str, str]] = {
    "code": (
        "Code Documentation",
        "Generates reference documentation for application and library source files",
        "code.j2",
    ),
    "testAutomation": (
        "Test Automation Documentation",
        "Generates documentation for test automation scripts",
        "test_automation.j2",
    ),
    "api": (
        "API Documentation",
        "Generates endpoint and operation reference documentation",
        "api.j2",
    ),
    "component": (
        "Component Documentation",
        "Generates documentation for UI components",
        "component.j2",
    ),
    CUSTOM_TASK: (
        "Custom Prompt",
        "Uses your own instructions followed by the selected files",
        "general.j2",
    ),
}

FENCE_BY_SUFFIX = {
    ".py": "python",
    ".pyi": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".java": "java",
    ".kt": "kotlin",
    ".go": "go",
    ".rs": "rust",
    ".rb": "ruby",
    ".php": "php",
    ".cs": "csharp",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".swift": "swift",
    ".sh": "bash",
    ".ps1": "powershell",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
    ".toml": "toml",
    ".html": "html",
    ".css": "css",
    ".vue": "vue",
    ".md": "markdown",
    ".sql": "sql",
}


__all__ = ["CUSTOM_TASK", "FENCE_BY_SUFFIX", "TASK_SPECS"]
