"""
Diff display — compute and show colored unified diffs of a pending edit.

Includes a Textual-based diff viewer that pauses before the write so the
user can approve or reject the change.
"""

from __future__ import annotations

import difflib


def compute_diff(filepath: str, old_content: str, new_content: str) -> str | None:
    """Return a unified diff string, or None if the content is unchanged."""
    if old_content == new_content:
        return None

    old_lines = old_content.splitlines(keepends=True)
    new_lines = new_content.splitlines(keepends=True)

    diff = difflib.unified_diff(
        old_lines, new_lines,
        fromfile=f"a/{filepath}",
        tofile=f"b/{filepath}",
        lineterm="",
    )
    diff_text = "\n".join(line.rstrip("\r\n") for line in diff)
    return diff_text if diff_text.strip() else None


def format_colored_diff(diff_text: str) -> str:
    """Add ANSI colors to a unified diff string.

    Green for additions (+), red for deletions (-), cyan for @@ hunks.
    """
    lines = diff_text.splitlines()
    colored: list[str] = []
    for line in lines:
        if line.startswith("+++") or line.startswith("---"):
            colored.append(f"\033[1m{line}\033[0m")  # bold
        elif line.startswith("@@"):
            colored.append(f"\033[36m{line}\033[0m")  # cyan
        elif line.startswith("+"):
            colored.append(f"\033[32m{line}\033[0m")  # green
        elif line.startswith("-"):
            colored.append(f"\033[31m{line}\033[0m")  # red
        else:
            colored.append(line)
    return "\n".join(colored)


def format_rich_diff(diff_text: str) -> str:
    """Convert unified diff text to Rich markup for Textual display."""
    lines = diff_text.splitlines()
    markup_lines: list[str] = []
    for line in lines:
        # Escape Rich markup characters in the line content
        escaped = line.replace("[", "\\[")
        if line.startswith("+++") or line.startswith("---"):
            markup_lines.append(f"[bold white]{escaped}[/bold white]")
        elif line.startswith("@@"):
            markup_lines.append(f"[cyan]{escaped}[/cyan]")
        elif line.startswith("+"):
            markup_lines.append(f"[green]{escaped}[/green]")
        elif line.startswith("-"):
            markup_lines.append(f"[red]{escaped}[/red]")
        else:
            markup_lines.append(escaped)
    return "\n".join(markup_lines)


# ══════════════════════════════════════════════════════════════════
#  Interactive Diff Approval (Textual TUI)
# ══════════════════════════════════════════════════════════════════

def prompt_diff_approval(filepath: str, old_content: str, new_content: str) -> bool:
    """Show the diff in an interactive Textual viewer and wait for approval.

    Returns ``True`` if the user approves or the content is unchanged.
    Returns ``False`` if the user rejects.
    """
    diff_text = compute_diff(filepath, old_content, new_content)
    if diff_text is None:
        return True

    app = build_approval_app(filepath, diff_text)
    app.run()
    return app.approved


def build_approval_app(filepath: str, diff_text: str):
    """Build the Textual approve/reject app for one file's diff."""
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, VerticalScroll
    from textual.widgets import Button, Footer, Static

    class DiffApprovalApp(App):
        """Interactive diff viewer with approve/reject."""

        CSS = """
        Screen {
            background: $surface;
        }
        #title-bar {
            dock: top;
            height: 3;
            background: #1a1a2e;
            color: #e94560;
            text-align: center;
            padding: 1;
            text-style: bold;
        }
        #diff-scroll {
            height: 1fr;
            margin: 1 2;
            border: round #444;
            padding: 1;
        }
        #action-buttons {
            dock: bottom;
            height: 3;
            align: center middle;
            padding: 0 2;
        }
        #action-buttons Button {
            margin: 0 2;
            min-width: 20;
        }
        #summary {
            dock: bottom;
            height: 1;
            text-align: center;
            color: #888;
        }
        """

        BINDINGS = [
            Binding("a", "approve", "Approve"),
            Binding("ctrl+s", "approve", "Approve"),
            Binding("escape", "reject", "Reject"),
            Binding("r", "reject", "Reject"),
        ]

        def __init__(self) -> None:
            super().__init__()
            self.approved: bool = False

        def compose(self) -> ComposeResult:
            yield Static(f" ━━  Review edit: {filepath}  ━━ ", id="title-bar")
            with VerticalScroll(id="diff-scroll"):
                yield Static(format_rich_diff(diff_text))
            added = sum(1 for l in diff_text.splitlines()
                        if l.startswith("+") and not l.startswith("+++"))
            removed = sum(1 for l in diff_text.splitlines()
                          if l.startswith("-") and not l.startswith("---"))
            yield Static(
                f"  +{added} / -{removed} lines  |  "
                f"Press [bold]A[/bold] to approve, [bold]R[/bold] or Esc to reject",
                id="summary",
            )
            with Horizontal(id="action-buttons"):
                yield Button("✔ Approve", id="approve-btn", variant="success")
                yield Button("✕ Reject", id="reject-btn", variant="error")
            yield Footer()

        def on_button_pressed(self, event: Button.Pressed) -> None:
            self.approved = event.button.id == "approve-btn"
            self.exit()

        def action_approve(self) -> None:
            self.approved = True
            self.exit()

        def action_reject(self) -> None:
            self.approved = False
            self.exit()

    return DiffApprovalApp()
