"""appgen generation orchestrator.

Coordinates the two ways an app comes into being:

* New app      -- classify the request, render the catalog entry.
* Modification -- hand the request and the existing app to the
  modification engine.

If the modification path raises for any reason the request is regenerated
from scratch instead. The caller always gets an app back, but manual edits
made to the previous version are lost in that case.

Usage::

    python -m appgen.generator new "A pizza ordering app called Luigi's in green"
    python -m appgen.generator modify <project-id> "add Garlic Bread for $5.99"
    python -m appgen.generator list
    python -m appgen.generator show <project-id>
    python -m appgen.generator export <project-id> ./LuigisApp
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Mapping

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from appgen.catalog import TemplateCatalog
from appgen.config import Config
from appgen.modifier import ModificationEngine
from appgen.ollama_client import OllamaClient
from appgen.parser import IntentClassifier
from appgen.parser.models import GeneratedApp, ModificationResult
from appgen.store import ProjectStore, StoreError, export_files
from appgen.utils import (
    app_identifier,
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class AppGenerator:
    """Builds new apps and applies follow-up requests to existing ones.

    Attributes:
        classifier: Maps new-app requests to a category and customizations.
        catalog: Renders the starter app for a category.
        engine: Applies modification requests to existing apps.
    """

    def __init__(
        self,
        classifier: IntentClassifier | None = None,
        catalog: TemplateCatalog | None = None,
        engine: ModificationEngine | None = None,
    ) -> None:
        self.classifier = classifier or IntentClassifier()
        self.catalog = catalog or TemplateCatalog()
        self.engine = engine or ModificationEngine()

    @classmethod
    def from_config(cls, config: Config) -> "AppGenerator":
        """Wire a generator from configuration.

        The completion client is only created when a server URL is
        configured; otherwise classification is local only.
        """
        client = OllamaClient.from_config(config.ollama)
        return cls(classifier=IntentClassifier(client))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def generate(
        self,
        request: str,
        is_modification: bool = False,
        existing: GeneratedApp | Mapping[str, Any] | None = None,
    ) -> GeneratedApp:
        """Produce the app for *request*.

        Args:
            request: The user's free-text request.
            is_modification: Treat *request* as an edit of *existing*.
            existing: The current app, as a model or its JSON mapping.

        Returns:
            A new app, or *existing* with the modification applied (then
            ``is_modification`` is set and ``summary`` describes the change).
        """
        if is_modification:
            if existing is None:
                print_warning("Modification requested without an existing app; generating a new one.")
            else:
                try:
                    return self._apply_modification(request, existing)
                except Exception as exc:  # noqa: BLE001
                    print_warning(f"Modification failed ({exc}); regenerating the app from scratch.")

        return await self._create(request)

    def modify(self, request: str, existing: GeneratedApp) -> ModificationResult:
        """Run the modification engine directly."""
        return self.engine.modify(request, existing)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _create(self, request: str) -> GeneratedApp:
        classification = await self.classifier.classify(request)
        bundle = self.catalog.build(
            classification.template_category, classification.customizations
        )
        console.print(
            f"  [dim]Rendered {bundle.name} ({len(bundle.files)} files) "
            f"via {classification.source} classification[/dim]"
        )
        return GeneratedApp(
            template_category=classification.template_category,
            template_name=bundle.name,
            app_name=app_identifier(classification.customizations.business_name),
            features=bundle.features,
            files=bundle.files,
            customizations=classification.customizations,
        )

    def _apply_modification(
        self, request: str, existing: GeneratedApp | Mapping[str, Any]
    ) -> GeneratedApp:
        app = existing if isinstance(existing, GeneratedApp) else GeneratedApp.model_validate(existing)
        result = self.engine.modify(request, app)
        return app.model_copy(
            update={
                "files": result.files,
                "customizations": result.customizations,
                "summary": result.summary,
                "is_modification": True,
            }
        )


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------


def _print_app(app: GeneratedApp, project_id: str | None = None) -> None:
    rows = {
        "App": app.app_name,
        "Template": f"{app.template_name} ({app.template_category.value})",
        "Business": app.customizations.business_name,
        "Colors": (
            f"{app.customizations.primary_color} / {app.customizations.secondary_color} / "
            f"{app.customizations.background_color}"
        ),
        "Features": ", ".join(app.features),
        "Files": ", ".join(sorted(app.files)),
    }
    if project_id:
        rows = {"Project": project_id, **rows}
    print_summary_table(rows, title="Generated App")


async def _run_new(generator: AppGenerator, store: ProjectStore, request: str) -> int:
    if generator.classifier.client is not None and not await generator.classifier.client.is_available():
        print_warning("Completion server is not reachable -- falling back to keyword classification.")
    app = await generator.generate(request)
    record = store.create(request, app)
    _print_app(app, record.id)
    print_success(f"Created project {record.id}")
    return 0


async def _run_modify(
    generator: AppGenerator, store: ProjectStore, project_id: str, request: str
) -> int:
    record = store.get(project_id)
    app = await generator.generate(request, is_modification=True, existing=record.app)
    record = store.record_iteration(project_id, request, app)
    console.print(Panel(Text(app.summary or ""), title=f"Version {record.version}", border_style="cyan"))
    return 0


def _run_list(store: ProjectStore) -> int:
    records = store.list_projects()
    if not records:
        print_warning("No projects yet.")
        return 0
    table = Table(title="Projects", title_justify="left", header_style="bold cyan")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", overflow="fold")
    table.add_column("Version", justify="right")
    table.add_column("Updated", no_wrap=True)
    for record in records:
        table.add_row(
            record.id,
            escape(record.name),
            str(record.version),
            record.updated_at[:16].replace("T", " "),
        )
    console.print(table)
    return 0


def _run_show(store: ProjectStore, project_id: str) -> int:
    record = store.get(project_id)
    _print_app(record.app, record.id)
    for iteration in record.iterations:
        console.print(
            f"  [dim]v{iteration.version}[/dim] {escape(iteration.request)} -> {escape(iteration.summary)}"
        )
    return 0


def _run_export(store: ProjectStore, project_id: str, directory: str) -> int:
    record = store.get(project_id)
    written = export_files(record.app, directory)
    print_success(f"Wrote {len(written)} files to {Path(directory).resolve()}")
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m appgen.generator``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="appgen -- generate and modify React Native starter apps from plain text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m appgen.generator new \"A yoga studio app called Zen Flow in teal\"\n"
            "  python -m appgen.generator modify <id> \"change the color to purple\"\n"
        ),
    )
    parser.add_argument("--store", default=None, help="Project store directory (default: ./.appgen)")
    parser.add_argument("--config", default=None, help="Path to a JSON config file")

    sub = parser.add_subparsers(dest="command", required=True)
    new_cmd = sub.add_parser("new", help="Generate a new app")
    new_cmd.add_argument("request")
    modify_cmd = sub.add_parser("modify", help="Modify a stored app")
    modify_cmd.add_argument("project_id")
    modify_cmd.add_argument("request")
    sub.add_parser("list", help="List stored projects, most recently updated first")
    show_cmd = sub.add_parser("show", help="Show a stored app")
    show_cmd.add_argument("project_id")
    export_cmd = sub.add_parser("export", help="Write a stored app's files to a directory")
    export_cmd.add_argument("project_id")
    export_cmd.add_argument("directory")

    args = parser.parse_args(argv)

    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    if args.store:
        config.store_dir = Path(args.store)

    generator = AppGenerator.from_config(config)
    store = ProjectStore(config.store_dir)

    try:
        if args.command == "new":
            code = asyncio.run(_run_new(generator, store, args.request))
        elif args.command == "modify":
            code = asyncio.run(_run_modify(generator, store, args.project_id, args.request))
        elif args.command == "list":
            code = _run_list(store)
        elif args.command == "show":
            code = _run_show(store, args.project_id)
        else:
            code = _run_export(store, args.project_id, args.directory)
    except StoreError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
