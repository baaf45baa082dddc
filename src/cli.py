"""Command-line interface loop for the tree tracker.

Nodes are addressed by the outline numbers shown on screen and projects by
their position in the project list. The registry persists after every
successful command; this module only reads it back and redraws.
"""
import logging
from typing import List, Optional, Tuple
from registry import Registry
from render import outline, render_sidebar, render_tree
from status import status_label
from storage import Storage
from theme import Theme, color
import config

logger = logging.getLogger(__name__)

# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home); 3J first
# improves reliability in some terminals.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


STATUS_ALIASES = {
    't': 'todo',
    'todo': 'todo',
    'ip': 'doing',
    'doing': 'doing',
    'r': 'review',
    'review': 'review',
    'd': 'done',
    'done': 'done'
}


class CLI:
    def __init__(self, registry: Registry, storage: Optional[Storage] = None,
                 alt_screen: Optional[bool] = None):
        self.registry: Registry = registry
        self.storage: Optional[Storage] = storage
        self.theme: Theme = Theme(storage.load_theme() if storage else 'dark')
        self.alt_screen: bool = config.alt_screen() if alt_screen is None else alt_screen

    def run(self) -> None:
        """Main REPL loop; the screen is cleared and redrawn each cycle."""
        exit_message: Optional[str] = None
        notice: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self.draw()
                if notice:
                    print(f"\n{notice}")
                line = input("\n: ").strip()
                if not line:
                    notice = None
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the tree...")
                    notice = None
                    continue
                if lower == 'exit':
                    exit_message = "Goodbye."
                    break
                notice = self.handle(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    def draw(self) -> None:
        print(color("Projects:", self.theme.header))
        for line in render_sidebar(self.registry, self.theme):
            print(line)
        project = self.registry.active_project()
        if project is None:
            print("\nNo project selected. 'new <name>' creates one.")
            return
        print()
        lines, _ = render_tree(project, self.theme)
        for line in lines:
            print(line)

    def handle(self, line: str) -> Optional[str]:
        """Dispatch one command line; returns a message to show, if any."""
        try:
            return self._handle_command(line)
        except OSError as exc:
            logger.error("could not save: %s", exc)
            return f"Could not save: {exc}"

    # -------------------- command dispatch --------------------
    def _handle_command(self, line: str) -> Optional[str]:
        tokens = line.split()
        if not tokens:
            return None
        cmd, args = tokens[0].lower(), tokens[1:]
        handler = getattr(self, f"_cmd_{cmd}", None)
        if handler is None:
            return "Unknown command. Type 'help' for instructions."
        return handler(args)

    # ---- projects ----
    def _cmd_new(self, args: List[str]) -> Optional[str]:
        name = ' '.join(args) or input("Project name: ")
        if self.registry.create_project(name) is None:
            return "Name required."
        return None

    def _cmd_ls(self, args: List[str]) -> Optional[str]:
        return '\n'.join(render_sidebar(self.registry, self.theme))

    def _cmd_use(self, args: List[str]) -> Optional[str]:
        if len(args) != 1 or not args[0].isdigit():
            return "Usage: use <project number>"
        n = int(args[0])
        if n < 1 or n > len(self.registry.projects):
            return f"No project #{n}."
        self.registry.select(self.registry.projects[n - 1].id)
        return None

    def _cmd_rename(self, args: List[str]) -> Optional[str]:
        project = self.registry.active_project()
        if project is None:
            return "No project selected."
        name = ' '.join(args) or input(f"New name [{project.name}]: ")
        if not self.registry.rename_project(project.id, name):
            return "Name required."
        return None

    def _cmd_drop(self, args: List[str]) -> Optional[str]:
        project = self.registry.active_project()
        if project is None:
            return "No project selected."
        if not _confirm(f'Delete project "{project.name}" and all its nodes?'):
            return "Cancelled."
        self.registry.delete_project(project.id)
        return f'Project "{project.name}" deleted.'

    # ---- nodes ----
    def _cmd_add(self, args: List[str]) -> Optional[str]:
        return self._add(None, args)

    def _cmd_sub(self, args: List[str]) -> Optional[str]:
        if not args:
            return "Usage: sub <n> [title...]"
        node_id, err = self._node_id(args[0])
        if err:
            return err
        return self._add(node_id, args[1:])

    def _add(self, parent_id: Optional[str], args: List[str]) -> Optional[str]:
        if self.registry.active_project() is None:
            return "No project selected."
        if args:  # inline shorthand
            title, description, status = ' '.join(args), '', 'todo'
        else:
            title = input("Title: ")
            description = input("Description (optional): ")
            raw_status = input("Status (todo/doing/review/done or t/ip/r/d) [todo]: ").strip().lower()
            status = STATUS_ALIASES.get(raw_status or 'todo')
            if status is None:
                return "Invalid status."
        if self.registry.add_node(title, description, status, parent_id=parent_id) is None:
            return "Title required."
        return None

    def _cmd_edit(self, args: List[str]) -> Optional[str]:
        if len(args) != 1:
            return "Usage: edit <n>"
        node_id, err = self._node_id(args[0])
        if err:
            return err
        node = self.registry.get_node(node_id)
        title = input(f"Title [{node.title}]: ").strip() or node.title
        raw_desc = input(f"Description [{node.description}] ('-' clears): ").strip()
        description = '' if raw_desc == '-' else (raw_desc or node.description)
        status: Optional[str] = None
        if node.is_leaf:
            raw_status = input(f"Status [{node.status}]: ").strip().lower()
            if raw_status:
                status = STATUS_ALIASES.get(raw_status)
                if status is None:
                    return "Invalid status."
        self.registry.edit_node(node_id, title, description, status)
        return None

    def _cmd_cy(self, args: List[str]) -> Optional[str]:
        if len(args) != 1:
            return "Usage: cy <n>"
        node_id, err = self._node_id(args[0])
        if err:
            return err
        if not self.registry.cycle_status(node_id):
            status = self.registry.node_status(node_id)
            return f"Status is auto-computed from children ({status_label(status)})."
        return None

    def _cmd_rm(self, args: List[str]) -> Optional[str]:
        if len(args) != 1:
            return "Usage: rm <n>"
        node_id, err = self._node_id(args[0].rstrip('.'))
        if err:
            return err
        node = self.registry.get_node(node_id)
        if not _confirm(f'Delete "{node.title}" and all its children?'):
            return "Cancelled."
        self.registry.delete_node(node_id)
        return None

    def _cmd_fold(self, args: List[str]) -> Optional[str]:
        if len(args) != 1:
            return "Usage: fold <n>"
        node_id, err = self._node_id(args[0])
        if err:
            return err
        self.registry.toggle_collapsed(node_id)
        return None

    def _cmd_theme(self, args: List[str]) -> Optional[str]:
        self.theme = self.theme.toggled()
        if self.storage is not None:
            self.storage.save_theme(self.theme.name)
        return f"Theme: {self.theme.name}"

    def _node_id(self, token: str) -> Tuple[Optional[str], Optional[str]]:
        """Map an outline number to a node id; returns (id, error)."""
        project = self.registry.active_project()
        if project is None:
            return None, "No project selected."
        if not token.isdigit():
            return None, "Invalid number."
        index = [node.id for node, _ in outline(project)]
        n = int(token)
        if n < 1 or n > len(index):
            return None, f"No node #{n}."
        return index[n - 1], None

    # -------------------- help --------------------
    def _help(self) -> None:
        print("Projects:")
        print("  new <name>          Create a project and switch to it")
        print("  ls                  List projects")
        print("  use <n>             Switch to project number n")
        print("  rename <name>       Rename the current project")
        print("  drop                Delete the current project (asks first)")
        print("Nodes (numbers as shown in the outline):")
        print("  add [title...]      Add a top-level node (prompts without a title)")
        print("  sub <n> [title...]  Add a child under node n")
        print("  edit <n>            Edit title/description (and status on leaves)")
        print("  cy <n>              Cycle a leaf: todo -> doing -> review -> done")
        print("  rm <n>              Delete node n and its children (asks first)")
        print("  fold <n>            Collapse/expand node n")
        print("Other:")
        print("  theme               Toggle dark/light palette")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Exit (changes are saved as you go)")


def _confirm(message: str) -> bool:
    return input(f"{message} [y/N] ").strip().lower() in {'y', 'yes'}
