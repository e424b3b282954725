"""
PostsWindowView
---------------
Tkinter main window listing post titles. This file contains **only View
code**: no HTTP, no decoding. It exposes callback hooks that the app wires
to ``PostsVM``.

Layout:
  * Toolbar with a Refresh action
  * Left: table of posts (id, title)
  * Right: body of the selected post
  * StatusBar at the bottom
"""
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Optional, Sequence, Tuple

PostRow = Tuple[int, str]

_log = logging.getLogger(__name__)

# Accent used for the Refresh button and the selected row.
_ACCENT = "#2f6f9f"
_PANE_BG = "#fbfbfc"


class PostsWindowView(tk.Tk):
    """Top-level window for the posts list."""

    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        *,
        on_refresh: OnVoid = None,
        on_select: Optional[Callable[[int], None]] = None,
    ) -> None:
        super().__init__()
        self.title("Posts")
        self.geometry("960x600")
        self.minsize(640, 400)
        self._apply_style()

        self._on_refresh = on_refresh
        self._on_select = on_select

        self.rowconfigure(1, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_toolbar(self)
        self._build_main_area(self)
        self._build_statusbar(self)

        self.bind("<F5>", lambda e: self._fire(self._on_refresh))
        self.bind("<Control-r>", lambda e: self._fire(self._on_refresh))

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_toolbar(self, parent: tk.Misc) -> None:
        toolbar = ttk.Frame(parent)
        toolbar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 4))

        ttk.Label(toolbar, text="Posts", style="Title.TLabel").pack(side=tk.LEFT)
        self.btn_refresh = ttk.Button(
            toolbar,
            text="Refresh",
            style="Primary.TButton",
            command=lambda: self._fire(self._on_refresh),
        )
        self.btn_refresh.pack(side=tk.RIGHT)

    def _build_main_area(self, parent: tk.Misc) -> None:
        content = ttk.Panedwindow(parent, orient=tk.HORIZONTAL)
        content.grid(row=1, column=0, sticky="nsew", padx=8, pady=4)

        list_frame = ttk.Frame(content)
        self.tree = ttk.Treeview(
            list_frame,
            columns=("id", "title"),
            show="headings",
            selectmode="browse",
        )
        self.tree.heading("id", text="Id")
        self.tree.heading("title", text="Title")
        self.tree.column("id", width=60, anchor=tk.E, stretch=False)
        self.tree.column("title", width=420, anchor=tk.W, stretch=True)
        vsb = ttk.Scrollbar(list_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        vsb.pack(side=tk.RIGHT, fill=tk.Y)
        self.tree.bind("<<TreeviewSelect>>", self._on_select_changed)

        detail = ttk.Frame(content, style="Card.TFrame", padding=12)
        self.detail_title = ttk.Label(detail, text="", wraplength=360, background=_PANE_BG, font=("TkDefaultFont", 11, "bold"))
        self.detail_title.pack(anchor=tk.W, fill=tk.X)
        self.detail_body = tk.Text(detail, wrap="word", height=10, relief="flat", borderwidth=0, background=_PANE_BG)
        self.detail_body.pack(fill=tk.BOTH, expand=True, pady=(8, 0))
        self.detail_body.configure(state="disabled")

        content.add(list_frame, weight=3)
        content.add(detail, weight=2)

    def _build_statusbar(self, parent: tk.Misc) -> None:
        self.status_var = tk.StringVar(value="Ready")
        status = ttk.Label(parent, textvariable=self.status_var, style="Subtle.TLabel", anchor=tk.W)
        status.grid(row=2, column=0, sticky="ew", padx=8, pady=(0, 6))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def set_rows(self, rows: Sequence[PostRow]) -> None:
        """Replace table rows; row iid is the position in the batch."""
        self.tree.delete(*self.tree.get_children())
        for index, (post_id, title) in enumerate(rows):
            self.tree.insert("", tk.END, iid=str(index), values=(post_id, title))
        self.show_detail("", "")

    def show_detail(self, title: str, body: str) -> None:
        self.detail_title.configure(text=title)
        self.detail_body.configure(state="normal")
        self.detail_body.delete("1.0", tk.END)
        self.detail_body.insert("1.0", body)
        self.detail_body.configure(state="disabled")

    def set_status(self, text: str) -> None:
        self.status_var.set(text)

    def set_busy(self, busy: bool) -> None:
        self.btn_refresh.configure(state="disabled" if busy else "normal")
        self.configure(cursor="watch" if busy else "")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_select_changed(self, _event=None) -> None:
        selection = self.tree.selection()
        if not selection:
            return
        self._fire(self._on_select, int(selection[0]))

    def _fire(self, callback: Optional[Callable[..., Any]], *args: Any) -> None:
        # Tk swallows callback errors into stderr; route them through logging instead.
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            _log.exception("Posts window callback failed")

    def _apply_style(self) -> None:
        style = ttk.Style(self)
        if "clam" in style.theme_names():
            style.theme_use("clam")
        style.configure("Title.TLabel", font=("TkDefaultFont", 13, "bold"))
        style.configure("Subtle.TLabel", foreground="#5b6573")
        style.configure("Card.TFrame", background=_PANE_BG)
        style.configure("Primary.TButton", padding=(12, 4), foreground="white", background=_ACCENT)
        style.map("Primary.TButton", background=[("disabled", "#a7bccd"), ("active", "#255a82")])
        style.configure("Treeview", rowheight=24)
        style.map("Treeview", background=[("selected", _ACCENT)])
