# app.py
# CustomTkinter GUI for the KWIC index (dark theme, ZIP-aware).
# - Load from a text file, a folder, or a ZIP archive (ZIP extracted safely to a temp dir).
# - Background build thread (keeps UI responsive).
# - Keyword filter with debounce; index & event log panes.

from __future__ import annotations
import os
import shutil
import threading
import zipfile
import tempfile
from typing import List, Optional

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

from kwic.engine import Engine
from kwic.index import KwicIndex
from kwic.models import IndexEntry

# Rows shown at once; the full listing can be much larger
MAX_SHOWN = 2_000


# -------------------- small helpers --------------------

def shorten_path(p: str, max_chars: int = 60) -> str:
    """Shorten long paths neatly for labels."""
    if len(p) <= max_chars:
        return p
    keep = max_chars // 2 - 3
    return p[:keep] + "..." + p[-keep:]


def safe_extract_zip(zip_path: str, dest_dir: str) -> None:
    """
    Extract zip contents to dest_dir with basic zip-slip protection.
    Only ensures members stay within dest_dir (no absolute paths / .. traversal).
    """
    dest_abs = os.path.abspath(dest_dir)
    with zipfile.ZipFile(zip_path) as zf:
        for info in zf.infolist():
            target = os.path.abspath(os.path.join(dest_abs, info.filename))
            if target != dest_abs and not target.startswith(dest_abs + os.sep):
                raise RuntimeError(f"Unsafe zip entry: {info.filename!r}")
        zf.extractall(dest_abs)


def format_entry(e: IndexEntry) -> str:
    return f"{e.rank:>6}  L{e.line:<5} +{e.offset:<3} {e.text}"


# -------------------- main app --------------------

class KwicApp(ctk.CTk):
    """Dark-themed GUI that builds a KWIC index from a file, folder or ZIP."""

    def __init__(self) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("KWIC Index")
        self.geometry("900x650")
        self.minsize(820, 560)

        # State
        self._index: Optional[KwicIndex] = None
        self._loading_thread: Optional[threading.Thread] = None
        self._filter_after_id: Optional[str] = None
        self._tmpdir_path: Optional[str] = None  # holds extracted ZIP dir

        # Fonts
        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        # Layout grid
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)  # index
        self.grid_rowconfigure(4, weight=0)  # log

        self._build_header()
        self._build_source_bar()
        self._build_filter()
        self._build_results()
        self._build_log()

        self._set_status("Ready")
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(header, text="KWIC Index", font=self.font_title).grid(
            row=0, column=0, sticky="w", padx=12, pady=10
        )

    def _build_source_bar(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        bar.grid_columnconfigure(3, weight=1)

        ctk.CTkButton(bar, text="Choose File", command=self._choose_file).grid(row=0, column=0, padx=(12, 6), pady=10)
        ctk.CTkButton(bar, text="Choose Folder", command=self._choose_folder).grid(row=0, column=1, padx=(0, 6), pady=10)
        ctk.CTkButton(bar, text="Choose ZIP", command=self._choose_zip).grid(row=0, column=2, padx=(0, 6), pady=10)

        self.lbl_source = ctk.CTkLabel(bar, text="No source selected", anchor="w", font=self.font_label)
        self.lbl_source.grid(row=0, column=3, sticky="ew", padx=6, pady=10)

        self.progress = ctk.CTkProgressBar(bar, mode="indeterminate", determinate_speed=1.2)
        self.progress.grid(row=0, column=4, sticky="e", padx=(0, 6), pady=10)

        self.lbl_status = ctk.CTkLabel(bar, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=5, sticky="e", padx=12, pady=10)

    def _build_filter(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=2, column=0, sticky="ew", padx=12, pady=6)
        box.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(box, text="Keyword:", font=self.font_label).grid(row=0, column=0, sticky="w", padx=12, pady=10)
        self.entry_kw = ctk.CTkEntry(box, placeholder_text="Empty shows the whole index")
        self.entry_kw.grid(row=0, column=1, sticky="ew", padx=6, pady=10)
        self.entry_kw.bind("<KeyRelease>", self._on_filter_changed)

        self.var_prefix = ctk.BooleanVar(value=True)
        ctk.CTkCheckBox(box, text="prefix", variable=self.var_prefix, command=self._apply_filter).grid(
            row=0, column=2, padx=(6, 12), pady=10
        )

    def _build_results(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="nsew", padx=12, pady=6)
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(0, weight=1)

        self.txt_results = ctk.CTkTextbox(frame, wrap="none", font=self.font_mono)
        self.txt_results.grid(row=0, column=0, sticky="nsew", padx=12, pady=12)
        self._set_results("(no index yet — choose a file, folder or ZIP)")

    def _build_log(self) -> None:
        self.txt_log = ctk.CTkTextbox(self, height=100, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=4, column=0, sticky="nsew", padx=12, pady=(6, 12))
        self._log("GUI ready.")

    # --------- source selection ---------

    def _choose_file(self) -> None:
        path = fd.askopenfilename(title="Choose text file", filetypes=[("Text", "*.txt"), ("All files", "*.*")])
        if path:
            self._start_loading(mode="file", source=path)

    def _choose_folder(self) -> None:
        path = fd.askdirectory(title="Choose corpus folder")
        if path:
            self._start_loading(mode="folder", source=path)

    def _choose_zip(self) -> None:
        path = fd.askopenfilename(title="Choose corpus ZIP", filetypes=[("ZIP archives", "*.zip"), ("All files", "*.*")])
        if path:
            self._start_loading(mode="zip", source=path)

    # --------- build pipeline (threaded) ---------

    def _start_loading(self, mode: str, source: str) -> None:
        if self._loading_thread and self._loading_thread.is_alive():
            mb.showinfo("Loading", "An index is already being built. Please wait.")
            return

        self._cleanup_tmpdir()
        self.lbl_source.configure(text=f"{mode.title()}: {shorten_path(source)}")
        self._set_status("Building…")
        self.progress.start()
        self._index = None

        self._loading_thread = threading.Thread(target=self._build_worker, args=(mode, source), daemon=True)
        self._loading_thread.start()

    def _build_worker(self, mode: str, source: str) -> None:
        try:
            paths: List[str]
            if mode == "zip":
                tmpdir = tempfile.mkdtemp(prefix="kwic_corpus_")
                try:
                    safe_extract_zip(source, tmpdir)
                except Exception:
                    shutil.rmtree(tmpdir, ignore_errors=True)
                    raise
                self._tmpdir_path = tmpdir
                paths = [tmpdir]
            else:
                paths = [source]

            # each build is a new run with a fresh engine
            eng = Engine()
            eng.load(paths)
            eng.build()
            index = eng.index
        except Exception as exc:
            self.after(0, lambda err=exc: self._on_build_error(err))
            return

        self.after(0, lambda: self._on_build_ok(index))

    def _on_build_ok(self, index: KwicIndex) -> None:
        self.progress.stop()
        self._index = index
        self._set_status(f"{index.rank_count():,} shifts from {index.store.line_count():,} lines.")
        self._log(f"Index ready ({index.rank_count()} shifts).")
        self._apply_filter()
        self.entry_kw.focus_set()

    def _on_build_error(self, exc: Exception) -> None:
        self.progress.stop()
        self._set_status("Error while building index.")
        self._log(f"ERROR: {exc!r}")
        mb.showerror("Build error", f"Failed to build index.\n{exc}")

    # --------- filter ---------

    def _on_filter_changed(self, _ev=None) -> None:
        if self._filter_after_id is not None:
            self.after_cancel(self._filter_after_id)
        self._filter_after_id = self.after(160, self._apply_filter)

    def _apply_filter(self) -> None:
        self._filter_after_id = None
        if self._index is None:
            return
        kw = self.entry_kw.get().strip()
        if kw:
            entries = self._index.lookup(kw, prefix=self.var_prefix.get())
        else:
            entries = list(self._index.entries(0, MAX_SHOWN))
        if not entries:
            self._set_results("(no matches)")
            return
        text = "\n".join(format_entry(e) for e in entries[:MAX_SHOWN])
        if len(entries) > MAX_SHOWN or (not kw and self._index.rank_count() > MAX_SHOWN):
            text += f"\n… showing first {MAX_SHOWN:,}"
        self._set_results(text)

    # --------- misc UI helpers ---------

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    def _set_results(self, text: str) -> None:
        self.txt_results.configure(state="normal")
        self.txt_results.delete("0.0", "end")
        if text:
            self.txt_results.insert("end", text)
        self.txt_results.configure(state="disabled")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _cleanup_tmpdir(self) -> None:
        if self._tmpdir_path and os.path.isdir(self._tmpdir_path):
            try:
                shutil.rmtree(self._tmpdir_path, ignore_errors=True)
            finally:
                self._tmpdir_path = None

    def _on_close(self) -> None:
        self._cleanup_tmpdir()
        self.destroy()


if __name__ == "__main__":
    app = KwicApp()
    app.mainloop()
