"""Markdown template for the per-project execution instructions file."""

from __future__ import annotations

_HTML_SECTION = """## How to Run the Project

- **Step 1**: Navigate to the project directory: `{location}`
- **Step 2**: Open `index.html` in a web browser (Chrome, Firefox, Edge or Safari), either by double-clicking it or with "Open with".

### Dependencies
- None. This is a static HTML project that runs directly in the browser.

### Compatibility
- Works in all modern browsers; no additional software is needed.

### Potential Issues
- **Browser Compatibility**: Keep your browser up to date for HTML5/CSS3 support.
- **File Path Issues**: Open the file straight from the file system unless the project says it needs a server.
"""

_PYTHON_SECTION = """## How to Run the Project

- **Step 1**: Open your terminal.
- **Step 2**: Navigate to the project directory:
  ```bash
  cd {location}
  ```
- **Step 3**: Run the script:
  ```bash
  python {name}.py
  ```

### Dependencies
- **Python**: 3.8 or newer.
- No additional libraries are needed for a basic script.

### Compatibility
- Works on Windows, macOS and Linux with Python installed (https://www.python.org/downloads/).

### Potential Issues
- **Python Not Installed**: A "command not found" error means Python is missing from your PATH.
- **Version Mismatch**: Check `python --version` (or `python3 --version`) reports Python 3.
- **File Path Issues**: Run the script from the project directory.
"""

_REACT_SECTION = """## How to Run the Project

- **Step 1**: Open your terminal.
- **Step 2**: Navigate to the project directory:
  ```bash
  cd {location}
  ```
- **Step 3**: Install dependencies:
  ```bash
  npm install
  ```
- **Step 4**: Start the development server:
  ```bash
  npm start
  ```
- **Step 5**: Open http://localhost:3000 in your browser.

### Dependencies
- **Node.js**: 14 or newer, including npm (https://nodejs.org/).
- **React** and **Tailwind CSS** are installed through npm.

### Compatibility
- Works on Windows, macOS and Linux with Node.js and npm installed.

### Potential Issues
- **Node.js Not Installed**: A "command not found" error means Node.js/npm are missing.
- **Port Conflict**: If port 3000 is busy the dev server offers another port.
- **Dependency Errors**: Delete `node_modules` and `package-lock.json`, then run `npm install` again.
"""

_GENERIC_SECTION = """## How to Run the Project

- **Step 1**: Navigate to the project directory: `{location}`
- **Step 2**: Follow the run instructions in `README.md`.

### Dependencies
- See `README.md` for required dependencies.

### Compatibility
- See `README.md` for compatibility information.

### Potential Issues
- **Missing Dependencies**: Install everything `README.md` lists.
- **Environment Setup**: Check your environment configuration if the project fails to start.
"""


def render_execution_guide(project_type: str | None, project_name: str | None, root_name: str) -> str:
    """Render execution instructions for a project.

    The section is picked by the first of "html", "python" or "react" found in
    the project type; anything else gets generic README-based guidance.
    """
    name = project_name or "unknown"
    kind = (project_type or "").lower()
    location = f"{root_name}/{name}"

    if "html" in kind:
        section = _HTML_SECTION
    elif "python" in kind:
        section = _PYTHON_SECTION
    elif "react" in kind:
        section = _REACT_SECTION
    else:
        section = _GENERIC_SECTION

    header = (
        f"# Execution Instructions for {name}\n\n"
        f"This document explains how to run your {project_type or 'project'} project, "
        "which dependencies it needs, where it runs, and issues you might encounter.\n\n"
    )
    return header + section.format(location=location, name=name)


__all__ = ["render_execution_guide"]
