from pathlib import Path

from django.conf import settings
from django.core.management.base import CommandError

from bible.catalog import Catalog
from bible.loaders import LoadAborted, LoadError, LoadReport, load_folder_tree
from bible.management.base import LoaderCommand
from bible.store import BibleStore


class Command(LoaderCommand):
    help = (
        "Load one language from the folder tree <data-dir>/<language>/<book slug>/<chapter>.json. "
        "Failing books/chapters are reported without stopping the others."
    )

    def add_arguments(self, parser):
        parser.add_argument("language_code", help="Language folder name (ex: ruanglat)")
        parser.add_argument("--data-dir", default=None, help="Data root (default: settings.BIBLE_DATA_DIR)")
        parser.add_argument("--catalog", default=None,
                            help="Catalog JSON with display names (default: settings.BIBLE_CATALOG_PATH)")
        super().add_arguments(parser)

    def handle(self, *args, **opts):
        self.verbosity = opts["verbosity"]
        language_code: str = opts["language_code"]
        data_dir = Path(opts["data_dir"] or settings.BIBLE_DATA_DIR)

        try:
            catalog = Catalog.load(opts["catalog"])
        except (OSError, ValueError) as exc:
            raise CommandError(f"Unreadable catalog: {exc}") from exc

        self.stdout.write("Starting Bible data loading from folders...")
        report = LoadReport(fail_fast=opts["fail_fast"])
        with BibleStore(using=opts["database"]) as store:
            try:
                load_folder_tree(store, language_code, data_dir, catalog, report=report, progress=self.progress)
            except (LoadError, LoadAborted) as exc:
                raise CommandError(f"Error loading Bible data: {exc}") from exc

        self.finish(report, "Bible data loading")
