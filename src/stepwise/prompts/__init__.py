"""Prompt definitions for Stepwise's five-step workflow."""

from __future__ import annotations

from typing import Mapping

from stepwise.config import EXECUTION_GUIDE_FILENAME

from .execution_guide import render_execution_guide

SYSTEM_INSTRUCTION_TEMPLATE = """
You are a project-building assistant working in a terminal. Every project lives inside the "{root}" directory. You analyze the request, determine the project type, propose a minimal file structure inside "{root}" for the user to approve (new projects only), and then create or update the files. For update requests (for example "css file is not working") you locate the affected file and fix it without regenerating the whole project. For execution questions you explain how to run an existing project. Every project structure includes an "{guide}" file with execution instructions.

Break every request into exactly 5 steps:
1. "initialization": Decide whether the request is a new project, an update, or an execution query.
2. "analyze": Identify the project type, name and requirements, checking existing files in "{root}". Always state the name (for example "I'll name it 'todo-app'"). For existing projects say "Found project '<name>' in '{root}'", for updates add "with a <file>", and state the type as "identified as a <type>.".
3. "generate_structure": For new projects, propose a minimal structure inside "{root}" including "README.md" and "{guide}". Skip for updates and execution queries.
4. "generate_files": Create or update the files. For updates, fix only the affected file. Skip for execution queries.
5. "final_result": Confirm what was created or updated, or give execution instructions that reference "{guide}".

Rules:
- Infer the project type from the request ("to-do list in HTML" is an HTML web app, not Python).
- All file operations happen inside "{root}"; paths you pass to tools are relative to it.
- Keep structures minimal: no src/ or tests/ folders for a simple script unless asked.
- Reply with exactly one JSON object per message: {{"step": <step_name>, "content": <text>, "function": <tool_name> | null, "args": <tool_args> | null}}.
- Perform one step per message and wait for the next input.

Available Tools:
{tools}

Example flow for "Create a to-do list in HTML":
1. {{"step": "initialization", "content": "I'll create a new HTML to-do list project in '{root}'.", "function": null, "args": null}}
2. {{"step": "analyze", "content": "The project is an HTML to-do list app. I'll name it 'todo-app'.", "function": "read_directory", "args": "{root}"}}
3. {{"step": "generate_structure", "content": "Generating structure for the to-do list app.", "function": "generate_project_structure", "args": {{"projectType": "HTML web app", "description": "creates a to-do list with add, edit and delete"}}}}
4. {{"step": "generate_files", "content": "Creating files for the to-do list app.", "function": "create_dynamic_file", "args": [{{"fileName": "todo-app/index.html", "content": "..."}}]}}
5. {{"step": "final_result", "content": "Created '{root}/todo-app'. Execution instructions are in '{guide}'.", "function": null, "args": null}}

Example flow for "run the project":
1. {{"step": "initialization", "content": "I'll explain how to run an existing project in '{root}'.", "function": null, "args": null}}
2. {{"step": "analyze", "content": "Found project 'todo-app' in '{root}', identified as an HTML web app.", "function": "read_directory", "args": "{root}"}}
3. {{"step": "generate_structure", "content": "Skipping structure generation for an execution request.", "function": null, "args": null}}
4. {{"step": "generate_files", "content": "Skipping file generation for an execution request.", "function": null, "args": null}}
5. {{"step": "final_result", "content": "Execution instructions are in '{root}/todo-app/{guide}'.", "function": null, "args": null}}
""".strip()

STRUCTURE_PROMPT_TEMPLATE = """
Generate a JSON object describing the folder and file structure for a {project_type} project that {description}. Keep it minimal and appropriate for the project type: a simple HTML project needs only index.html, style.css and script.js; a Python script should avoid src/ or tests/ folders unless they are needed. Give every path relative to the "{root}" directory and always include "README.md" and "{guide}". Return only the JSON object with a "structure" array, for example:
{{"structure": ["{root}/todo-app/index.html", "{root}/todo-app/style.css", "{root}/todo-app/script.js", "{root}/todo-app/README.md", "{root}/todo-app/{guide}"]}}
""".strip()

GENERIC_FILE_PROMPT_TEMPLATE = (
    'Generate production-ready content for a {file_type} file at "{path}" in a {project_type} '
    "project that {description}. Use modular code, error handling and comments. Config files "
    "get sensible defaults; source files include their imports and exports. Return ONLY the file content."
)

WEB_PYTHON_ADDENDUM = (
    " If this Python script serves a web interface (for example with Flask), its HTML must follow "
    "modern UI practice: semantic markup, responsive Tailwind layout and accessible controls."
)

UI_FILE_PROMPT_TEMPLATE = """
You are a UI developer producing polished, production-ready web interfaces. Write the {file_type} file at "{path}" for a {project_type} project that {description}.

Design:
- Clear layout hierarchy with interactive states, responsive from mobile up, accessible markup and alt text.
- Modern sans-serif typography, a consistent soft color palette with one accent, a 4/8/16px spacing scale.
- Subtle hover transitions, rounded borders and light shadows; Flexbox layouts with flex-wrap to avoid overflow.

Implementation:
- HTML files load Tailwind CSS from its CDN (<script src="https://cdn.tailwindcss.com"></script>); React files assume Tailwind is configured.
- Icons come from the FontAwesome CDN; images from Pexels or https://placehold.co/600x400.
- Include working interactivity (plain JavaScript for HTML, state for React).

{update_instruction}

Return ONLY the complete file content, with no explanations.
""".strip()

UPDATE_FIX_INSTRUCTION = (
    'The file has an issue: "{issue}". Update the content to fix it while preserving the file\'s core functionality.'
)
UPDATE_ENHANCE_INSTRUCTION = (
    "If the file exists, enhance the existing functionality while preserving its purpose."
)


def build_system_instruction(root_name: str, tool_descriptions: Mapping[str, str]) -> str:
    """Return the system instruction describing the protocol and the tools."""
    tools = "\n".join(f" - {name}: {description}" for name, description in tool_descriptions.items())
    return SYSTEM_INSTRUCTION_TEMPLATE.format(root=root_name, guide=EXECUTION_GUIDE_FILENAME, tools=tools)


def build_structure_prompt(root_name: str, project_type: str, description: str) -> str:
    """Return the one-shot prompt used to propose a project structure."""
    return STRUCTURE_PROMPT_TEMPLATE.format(
        root=root_name,
        guide=EXECUTION_GUIDE_FILENAME,
        project_type=project_type,
        description=description,
    )


def build_file_content_prompt(
    path: str,
    file_type: str,
    project_type: str,
    description: str,
    *,
    is_update: bool = False,
    update_issue: str | None = None,
) -> str:
    """Select and fill the file-content template for a file.

    HTML files and non-Python files of React/web projects get the UI
    template; everything else gets the generic one, with a web addendum for
    Python files in web projects. Update issues are embedded in either.
    """
    lowered_type = (project_type or "").lower()
    fix = UPDATE_FIX_INSTRUCTION.format(issue=update_issue) if is_update and update_issue else None
    web_project = "react" in lowered_type or "web" in lowered_type

    if file_type == "html" or (web_project and file_type != "py"):
        return UI_FILE_PROMPT_TEMPLATE.format(
            file_type=file_type,
            path=path,
            project_type=project_type,
            description=description,
            update_instruction=fix or UPDATE_ENHANCE_INSTRUCTION,
        )

    prompt = GENERIC_FILE_PROMPT_TEMPLATE.format(
        file_type=file_type,
        path=path,
        project_type=project_type,
        description=description,
    )
    if file_type == "py" and "web" in lowered_type:
        prompt += WEB_PYTHON_ADDENDUM
    if fix:
        prompt += f" {fix}"
    return prompt


__all__ = [
    "SYSTEM_INSTRUCTION_TEMPLATE",
    "UPDATE_ENHANCE_INSTRUCTION",
    "UPDATE_FIX_INSTRUCTION",
    "WEB_PYTHON_ADDENDUM",
    "build_file_content_prompt",
    "build_structure_prompt",
    "build_system_instruction",
    "render_execution_guide",
]
