#!/usr/bin/env python3
"""
Tracking Data Exporter - GUI Version
Pick a scene file and composition, then export its tracking data to JSON
"""

import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from pathlib import Path
import threading

from tracking_exporter import SCRIPT_NAME, VERSION, TrackingDataExporter, default_output_path


class TrackingDataExporterGUI:
    """GUI Application"""

    def __init__(self, root):
        self.root = root
        self.root.title(f"{SCRIPT_NAME} v{VERSION}")
        self.root.geometry("620x600")
        self.root.resizable(False, False)

        # Grayscale theme colors
        self.colors = {
            'bg': '#2a2a2a',
            'bg_light': '#3a3a3a',
            'accent': '#4a4a4a',
            'highlight': '#7a7a7a',
            'text': '#ffffff',
            'text_dim': '#a0a0a0',
            'entry_bg': '#1a1a1a',
            'entry_text': '#ffffff',
            'button_bg': '#555555',
            'button_hover': '#666666',
            'button_text': '#ffffff',
        }

        self.root.configure(bg=self.colors['bg'])

        # Variables
        self.scene_file = tk.StringVar()
        self.json_file = tk.StringVar()
        self.comp_name = tk.StringVar()
        self.precision = tk.StringVar()

        self.setup_theme()
        self.setup_ui()

    def setup_theme(self):
        """Configure dark theme for ttk widgets"""
        style = ttk.Style()

        style.configure('Dark.TFrame', background=self.colors['bg'])
        style.configure('Dark.TLabel',
                        background=self.colors['bg'],
                        foreground=self.colors['text'],
                        font=('Segoe UI', 9))
        style.configure('Title.TLabel',
                        background=self.colors['bg'],
                        foreground=self.colors['highlight'],
                        font=('Segoe UI', 18, 'bold'))
        style.configure('Subtitle.TLabel',
                        background=self.colors['bg'],
                        foreground=self.colors['text_dim'],
                        font=('Segoe UI', 10))
        style.configure('Dark.TLabelframe',
                        background=self.colors['bg'],
                        foreground=self.colors['text'],
                        borderwidth=1,
                        relief='solid')
        style.configure('Dark.TLabelframe.Label',
                        background=self.colors['bg'],
                        foreground=self.colors['highlight'],
                        font=('Segoe UI', 10, 'bold'))
        style.configure('Dark.Horizontal.TProgressbar',
                        background=self.colors['highlight'],
                        troughcolor=self.colors['accent'],
                        borderwidth=0,
                        thickness=8)

    def _make_entry(self, parent, variable, width):
        return tk.Entry(parent, textvariable=variable, width=width,
                        bg=self.colors['entry_bg'], fg=self.colors['entry_text'],
                        insertbackground=self.colors['entry_text'], relief='flat', borderwidth=2)

    def _make_button(self, parent, text, command, **kwargs):
        options = dict(bg=self.colors['accent'], fg=self.colors['button_text'],
                       activebackground=self.colors['bg_light'],
                       activeforeground=self.colors['button_text'],
                       relief='flat', borderwidth=0, padx=15, pady=5, cursor='hand2')
        options.update(kwargs)
        return tk.Button(parent, text=text, command=command, **options)

    def setup_ui(self):
        """Create the user interface"""
        ttk.Label(self.root, text="Tracking Data Export", style='Title.TLabel').pack(pady=(25, 5))
        ttk.Label(self.root, text=f"v{VERSION}", style='Subtitle.TLabel').pack(pady=(0, 15))

        main_frame = ttk.Frame(self.root, padding="20", style='Dark.TFrame')
        main_frame.pack(fill=tk.BOTH, expand=False)

        # Input file
        ttk.Label(main_frame, text="Scene Description (.json):", style='Dark.TLabel').grid(
            row=0, column=0, sticky=tk.W, pady=5)
        self._make_entry(main_frame, self.scene_file, 45).grid(row=1, column=0, pady=5, ipady=3)
        self._make_button(main_frame, "Browse...", self.browse_scene).grid(row=1, column=1, padx=5)

        # Composition selector
        ttk.Label(main_frame, text="Composition:", style='Dark.TLabel').grid(
            row=2, column=0, sticky=tk.W, pady=5)
        self.comp_list = ttk.Combobox(main_frame, textvariable=self.comp_name, state='readonly', width=42)
        self.comp_list.grid(row=3, column=0, sticky=tk.W, pady=5)

        # Output file
        ttk.Label(main_frame, text="Save Tracking Data (.json):", style='Dark.TLabel').grid(
            row=4, column=0, sticky=tk.W, pady=5)
        self._make_entry(main_frame, self.json_file, 45).grid(row=5, column=0, pady=5, ipady=3)
        self._make_button(main_frame, "Browse...", self.browse_output).grid(row=5, column=1, padx=5)

        ttk.Label(main_frame, text="Decimal places (blank = full):", style='Dark.TLabel').grid(
            row=6, column=0, sticky=tk.W, pady=5)
        self._make_entry(main_frame, self.precision, 10).grid(row=7, column=0, sticky=tk.W, pady=5, ipady=3)

        # Buttons
        button_frame = ttk.Frame(main_frame, style='Dark.TFrame')
        button_frame.grid(row=8, column=0, columnspan=2, pady=15)
        self.export_btn = self._make_button(button_frame, "Export", self.start_export,
                                            bg=self.colors['button_bg'],
                                            activebackground=self.colors['button_hover'],
                                            padx=30, pady=10, font=('Segoe UI', 12, 'bold'))
        self.export_btn.pack(side=tk.LEFT, padx=5)
        self._make_button(button_frame, "Cancel", self.root.destroy, padx=20, pady=10).pack(side=tk.LEFT, padx=5)

        self.progress = ttk.Progressbar(main_frame, mode='indeterminate', style='Dark.Horizontal.TProgressbar')
        self.progress.grid(row=9, column=0, columnspan=2, sticky=(tk.W, tk.E), pady=5)

        # Log text area
        log_frame = ttk.LabelFrame(main_frame, text="Progress Log", padding="5", style='Dark.TLabelframe')
        log_frame.grid(row=10, column=0, columnspan=2, sticky=(tk.W, tk.E, tk.N, tk.S), pady=10)

        self.log_text = tk.Text(log_frame, height=10, width=63, wrap=tk.WORD,
                                bg=self.colors['entry_bg'], fg=self.colors['entry_text'],
                                insertbackground=self.colors['entry_text'],
                                font=('Consolas', 9), relief='flat', borderwidth=0)
        self.log_text.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        scrollbar = ttk.Scrollbar(log_frame, command=self.log_text.yview)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self.log_text.config(yscrollcommand=scrollbar.set)

    def browse_scene(self):
        """Browse for input scene file and load its compositions"""
        filename = filedialog.askopenfilename(
            title="Select Scene Description",
            filetypes=[("Scene Description", "*.json"), ("All Files", "*.*")]
        )
        if not filename:
            return

        self.scene_file.set(filename)
        if not self.json_file.get():
            self.json_file.set(str(default_output_path(filename)))

        try:
            names = TrackingDataExporter().list_compositions(filename)
        except Exception as e:
            names = []
            self.log(f"Could not read compositions: {e}")

        self.comp_list['values'] = names
        if names:
            self.comp_list.current(0)
            self.log(f"Found {len(names)} composition(s)")
        else:
            self.comp_name.set("")
            self.log("No compositions found. Please open a scene with a composition.")

    def browse_output(self):
        """Browse for output JSON file"""
        filename = filedialog.asksaveasfilename(
            title="Save tracking data",
            defaultextension=".json",
            filetypes=[("JSON", "*.json"), ("All Files", "*.*")]
        )
        if filename:
            self.json_file.set(filename)

    def log(self, message):
        """Add message to log text area"""
        self.log_text.insert(tk.END, message + "\n")
        self.log_text.see(tk.END)

    def threadsafe_log(self, message):
        self.root.after(0, self.log, message)

    def start_export(self):
        """Start the export in a separate thread"""
        if not self.scene_file.get() or not Path(self.scene_file.get()).exists():
            messagebox.showerror("Error", "Please open a scene file first.")
            return

        if self.comp_list.current() < 0:
            messagebox.showerror("Error", "Please select a composition.")
            return

        if not self.json_file.get():
            messagebox.showerror("Error", "Please specify an output JSON file")
            return

        precision = self.precision.get().strip()
        if precision and not precision.isdigit():
            messagebox.showerror("Error", "Decimal places must be a whole number")
            return

        self.log_text.delete(1.0, tk.END)
        self.export_btn.config(state='disabled', bg=self.colors['accent'])
        self.progress.start()

        # Select by position so duplicate composition names stay unambiguous
        selection = self.comp_list.current() + 1
        thread = threading.Thread(
            target=self.run_export,
            args=(selection, int(precision) if precision else None)
        )
        thread.daemon = True
        thread.start()

    def run_export(self, composition, precision):
        """Run the actual export"""
        try:
            exporter = TrackingDataExporter(progress_callback=self.threadsafe_log)
            result = exporter.export(
                input_file=self.scene_file.get(),
                output_file=self.json_file.get(),
                composition=composition,
                precision=precision
            )

            if result.get('success'):
                self.root.after(0, lambda: messagebox.showinfo(
                    "Success", f"Tracking data exported successfully!\n\n{result['json_file']}"))
            else:
                self.root.after(0, lambda: messagebox.showerror(
                    "Error", f"Export did not complete:\n{result.get('message')}"))

        finally:
            self.root.after(0, self.export_complete)

    def export_complete(self):
        """Re-enable UI after export"""
        self.progress.stop()
        self.export_btn.config(state='normal', bg=self.colors['button_bg'])


def main():
    root = tk.Tk()
    app = TrackingDataExporterGUI(root)
    root.mainloop()


if __name__ == "__main__":
    main()
