"""File, message, input and colour dialogs.

Dialogs open through tkinter when a graphic display is available and fall
back to plain console prompts otherwise (or when ``settings.force_console``
is set).
"""

from __future__ import annotations

import contextlib
import getpass
import os
import string
import sys
from dataclasses import dataclass
from typing import Iterator, Sequence


@dataclass
class DialogSettings:
    """Run-time switches shared by every dialog."""

    force_console: bool = False


settings = DialogSettings()

DIALOG_TYPES = ("ok", "okcancel", "yesno", "yesnocancel")
MESSAGE_ICONS = ("info", "warning", "error", "question")
NOTIFY_ICONS = ("info", "warning", "error")

_NOTIFY_MILLISECONDS = 5000

_ANSWERS: dict[str, dict[str, int]] = {
    "ok": {},
    "okcancel": {"o": 1, "ok": 1, "c": 0, "cancel": 0},
    "yesno": {"y": 1, "yes": 1, "n": 0, "no": 0},
    "yesnocancel": {"y": 1, "yes": 1, "n": 2, "no": 2, "c": 0, "cancel": 0},
}

_PROMPTS = {
    "ok": "Press Enter to continue: ",
    "okcancel": "[O]k / [C]ancel: ",
    "yesno": "[Y]es / [N]o: ",
    "yesnocancel": "[Y]es / [N]o / [C]ancel: ",
}


# ---------------------------------------------------------------- helpers


def filter_description(patterns: Sequence[str], description: str | None = None) -> str:
    """Return the filter description, or the patterns themselves when none is given."""
    if description:
        return description
    return " ".join(patterns)


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse a colour of the form ``#RRGGBB``."""
    text = hex_color.strip()
    digits = text[1:]
    if (
        len(text) != 7
        or not text.startswith("#")
        or not all(c in string.hexdigits for c in digits)
    ):
        raise ValueError(f"not a #RRGGBB colour: {hex_color!r}")
    red, green, blue = bytes.fromhex(digits)
    return red, green, blue


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """Format three 0-255 components as an upper-case ``#RRGGBB`` string."""
    components = tuple(rgb)
    if len(components) != 3:
        raise ValueError(f"expected three components, got {len(components)}")
    for component in components:
        if not isinstance(component, int) or not 0 <= component <= 255:
            raise ValueError(f"colour component out of range: {component!r}")
    return "#" + "".join(f"{c:02X}" for c in components)


def check_text(text: str | None) -> str:
    """Return text fit for a dialog; quotes are refused, ``None`` becomes ``""``."""
    if text is None:
        return ""
    if '"' in text or "'" in text:
        raise ValueError(f"quotes are not allowed in dialog text: {text!r}")
    return text


def _split_default_path(default_path: str | None) -> tuple[str, str]:
    """Split a default into (directory, file); a trailing slash means directory only."""
    if not default_path:
        return "", ""
    if default_path.endswith(("/", "\\")):
        return default_path, ""
    return os.path.dirname(default_path), os.path.basename(default_path)


def _directory_options(default_path: str | None) -> dict[str, str]:
    directory, filename = _split_default_path(default_path)
    options = {}
    if directory:
        options["initialdir"] = directory
    if filename:
        options["initialfile"] = filename
    return options


def _read(prompt: str) -> str | None:
    """Read one console line; ``None`` when input has ended."""
    try:
        return input(prompt)
    except EOFError:
        return None


def _heading(title: str, message: str = "") -> None:
    if title:
        print(title)
    if message:
        print(message)


def _open_root():
    if settings.force_console:
        return None
    if sys.platform not in ("win32", "darwin") and not (
        os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")
    ):
        return None
    try:
        import tkinter
    except ImportError:
        return None
    try:
        root = tkinter.Tk()
    except tkinter.TclError:
        return None
    root.withdraw()
    return root


@contextlib.contextmanager
def _graphic_root() -> Iterator[object | None]:
    """Yield a hidden tkinter root, or ``None`` when only the console is usable."""
    root = _open_root()
    try:
        yield root
    finally:
        if root is not None:
            root.destroy()


def _valid_file(path: str) -> str | None:
    path = os.path.expanduser(path.strip())
    return path if path and os.path.isfile(path) else None


def _valid_save_path(path: str) -> str | None:
    path = os.path.expanduser(path.strip())
    if not path or os.path.isdir(path):
        return None
    parent = os.path.dirname(path) or "."
    return path if os.path.isdir(parent) else None


def _valid_folder(path: str) -> str | None:
    path = os.path.expanduser(path.strip())
    return path if path and os.path.isdir(path) else None


# ---------------------------------------------------------------- dialogs


def beep() -> None:
    """Sound the terminal bell."""
    sys.stdout.write("\a")
    sys.stdout.flush()


def notify_popup(title: str | None, message: str | None, icon_type: str = "info") -> None:
    """Show a short notification that closes by itself."""
    if icon_type not in NOTIFY_ICONS:
        raise ValueError(f"unknown icon type: {icon_type!r}")
    title = check_text(title)
    message = check_text(message)
    with _graphic_root() as root:
        if root is None:
            print(f"[{icon_type}] {title}".rstrip())
            if message:
                print(message)
            return
        import tkinter

        window = tkinter.Toplevel(root)
        window.title(title)
        tkinter.Label(window, text=message, padx=20, pady=10).pack()
        root.after(_NOTIFY_MILLISECONDS, root.quit)
        root.mainloop()


def message_box(
    title: str | None,
    message: str | None,
    dialog_type: str = "ok",
    icon_type: str = "info",
    default_button: int = 1,
) -> int:
    """Ask a question; 0 is cancel/no, 1 is ok/yes, 2 is no in ``yesnocancel``."""
    if dialog_type not in DIALOG_TYPES:
        raise ValueError(f"unknown dialog type: {dialog_type!r}")
    if icon_type not in MESSAGE_ICONS:
        raise ValueError(f"unknown icon type: {icon_type!r}")
    if default_button not in (0, 1, 2):
        raise ValueError(f"default button must be 0, 1 or 2, not {default_button!r}")
    title = check_text(title)
    message = check_text(message)

    if dialog_type == "yesnocancel":
        default_result = default_button
    else:
        default_result = 1 if default_button == 1 else 0

    with _graphic_root() as root:
        if root is None:
            return _console_message_box(title, message, dialog_type, icon_type, default_result)
        from tkinter import messagebox

        options = {"parent": root, "icon": icon_type}
        if dialog_type == "ok":
            messagebox.showinfo(title, message, **options)
            return 1
        if dialog_type == "okcancel":
            default = "ok" if default_result == 1 else "cancel"
            return 1 if messagebox.askokcancel(title, message, default=default, **options) else 0
        if dialog_type == "yesno":
            default = "yes" if default_result == 1 else "no"
            return 1 if messagebox.askyesno(title, message, default=default, **options) else 0
        default = {0: "cancel", 1: "yes", 2: "no"}[default_result]
        answer = messagebox.askyesnocancel(title, message, default=default, **options)
        if answer is None:
            return 0
        return 1 if answer else 2


def _console_message_box(
    title: str, message: str, dialog_type: str, icon_type: str, default_result: int
) -> int:
    _heading(f"[{icon_type}] {title}".rstrip(), message)
    answers = _ANSWERS[dialog_type]
    while True:
        line = _read(_PROMPTS[dialog_type])
        if dialog_type == "ok":
            return 1
        if line is None:
            return 0
        reply = line.strip().lower()
        if not reply:
            return default_result
        if reply in answers:
            return answers[reply]


def input_box(
    title: str | None, message: str | None, default_input: str | None = ""
) -> str | None:
    """Ask for a line of text; ``default_input=None`` hides what is typed."""
    title = check_text(title)
    message = check_text(message)
    hidden = default_input is None
    with _graphic_root() as root:
        if root is None:
            _heading(title, message)
            if hidden:
                try:
                    return getpass.getpass("> ")
                except EOFError:
                    return None
            line = _read("> ")
            if line is None:
                return None
            return line if line else default_input
        from tkinter import simpledialog

        options = {"parent": root, "initialvalue": default_input or ""}
        if hidden:
            options["show"] = "*"
        return simpledialog.askstring(title, message, **options)


def open_file_dialog(
    title: str | None,
    default_path: str | None = "",
    filter_patterns: Sequence[str] = (),
    description: str | None = None,
    allow_multiple: bool = False,
) -> str | list[str] | None:
    """Choose an existing file; a list when ``allow_multiple``; ``None`` on cancel."""
    title = check_text(title)
    patterns = list(filter_patterns)
    with _graphic_root() as root:
        if root is None:
            _heading(title)
            if patterns:
                print(f"Filter: {filter_description(patterns, description)}")
            line = _read("File: ")
            chosen = [line] if line else []
        else:
            from tkinter import filedialog

            filetypes = []
            if patterns:
                filetypes.append((filter_description(patterns, description), " ".join(patterns)))
            filetypes.append(("All files", "*"))
            options = {"parent": root, "title": title, "filetypes": filetypes}
            options.update(_directory_options(default_path))
            if allow_multiple:
                chosen = list(filedialog.askopenfilenames(**options))
            else:
                picked = filedialog.askopenfilename(**options)
                chosen = [picked] if picked else []

    valid = [path for path in map(_valid_file, chosen) if path]
    if not valid:
        return None
    return valid if allow_multiple else valid[0]


def save_file_dialog(
    title: str | None,
    default_path: str | None = "",
    filter_patterns: Sequence[str] = (),
    description: str | None = None,
) -> str | None:
    """Choose a file name to write to; ``None`` on cancel or when its folder is missing."""
    title = check_text(title)
    patterns = list(filter_patterns)
    with _graphic_root() as root:
        if root is None:
            _heading(title)
            if patterns:
                print(f"Filter: {filter_description(patterns, description)}")
            chosen = _read("Save as: ")
        else:
            from tkinter import filedialog

            filetypes = []
            if patterns:
                filetypes.append((filter_description(patterns, description), " ".join(patterns)))
            filetypes.append(("All files", "*"))
            options = {"parent": root, "title": title, "filetypes": filetypes}
            options.update(_directory_options(default_path))
            chosen = filedialog.asksaveasfilename(**options)
    if not chosen:
        return None
    return _valid_save_path(chosen)


def select_folder_dialog(title: str | None, default_path: str | None = "") -> str | None:
    """Choose an existing folder; ``None`` on cancel."""
    title = check_text(title)
    with _graphic_root() as root:
        if root is None:
            _heading(title)
            chosen = _read("Folder: ")
        else:
            from tkinter import filedialog

            options = {"parent": root, "title": title, "mustexist": True}
            if default_path:
                options["initialdir"] = default_path
            chosen = filedialog.askdirectory(**options)
    if not chosen:
        return None
    return _valid_folder(chosen)


def color_chooser(
    title: str | None,
    default_hex: str | None = None,
    default_rgb: Sequence[int] | None = None,
) -> tuple[str, tuple[int, int, int]] | None:
    """Choose a colour; returns ``("#RRGGBB", (r, g, b))`` or ``None`` on cancel.

    ``default_rgb`` is used only when ``default_hex`` is absent.
    """
    title = check_text(title)
    if default_hex:
        start = hex_to_rgb(default_hex)
    elif default_rgb is not None:
        start = hex_to_rgb(rgb_to_hex(default_rgb))
    else:
        start = (0, 0, 0)
    start_hex = rgb_to_hex(start)

    with _graphic_root() as root:
        if root is None:
            _heading(title)
            line = _read(f"Colour [{start_hex}]: ")
            if line is None:
                return None
            line = line.strip()
            if not line:
                return start_hex, start
            try:
                rgb = hex_to_rgb(line)
            except ValueError:
                return None
            return rgb_to_hex(rgb), rgb
        from tkinter import colorchooser

        picked, _ = colorchooser.askcolor(color=start_hex, title=title, parent=root)
        if picked is None:
            return None
        rgb = tuple(int(round(c)) for c in picked)
        return rgb_to_hex(rgb), rgb