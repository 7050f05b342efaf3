"""Pipeline orchestrator: load Draft JSON → convert → compact → save.

Coordinates file I/O around the converter and provides the partial
workflows used by the CLI (shorten/expand an existing Lexical file,
convert Draft content embedded in a larger proposal document).
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from draft_lexical.compact import compact, expand_keys, shorten_keys, strip_defaults
from draft_lexical.config import Config
from draft_lexical.converters.draft_converter import DraftConverter
from draft_lexical.exceptions import ConversionError, ParseError
from draft_lexical.ir.report import ConversionReport
from draft_lexical.ir.schema import EditorState, RootNode

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates Draft → Lexical conversion of JSON files."""

    def __init__(self, config: Config | None = None):
        self.config = config or Config.default()
        self.converter = DraftConverter(self.config)
        self.last_report: ConversionReport | None = None

    def convert(
        self,
        input_path: Path,
        output_path: Path,
        save_report: bool = False,
        report_path: Path | None = None,
    ) -> Path:
        """Full pipeline: Draft JSON file → Lexical JSON file.

        Args:
            input_path: Draft raw content JSON.
            output_path: Output Lexical JSON file.
            save_report: Whether to save a conversion report JSON.
            report_path: Custom path for report JSON. Defaults to {output_stem}.report.json.

        Returns:
            Path to the written Lexical JSON file.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        data = self.load_json(input_path)

        t0 = time.monotonic()
        state = self.converter.convert(data)
        t1 = time.monotonic()

        self.write_json(self.render(state), output_path)

        report = ConversionReport.from_state(
            state,
            source_file=input_path.name,
            block_count=len(data.get("blocks") or []),
        )
        report.convert_time_seconds = t1 - t0
        report.warnings.extend(self.converter.warnings)
        self.last_report = report

        if save_report:
            if report_path is None:
                report_path = output_path.with_suffix(".report.json")
            Path(report_path).write_text(report.to_json(), encoding="utf-8")
            logger.info("Saved report to %s", report_path)

        return output_path

    def render(self, state: EditorState) -> dict:
        """Apply the configured output shape to a converted editor state."""
        output = self.config.output
        data: Any = state.to_dict()
        if not output.wrap_editor_state:
            data = data["root"]
        else:
            data = {"editorState": data}
        return compact(data, output)

    def shorten(self, input_path: Path, output_path: Path) -> Path:
        """Rewrite a Lexical JSON file with short keys and without defaults."""
        data = self.load_json(input_path)
        self.write_json(shorten_keys(strip_defaults(data)), output_path)
        return Path(output_path)

    def expand(self, input_path: Path, output_path: Path) -> Path:
        """Rewrite a shortened Lexical JSON file in full form.

        The expanded data is validated against the node models, which
        also restores any stripped default fields.
        """
        data = expand_keys(self.load_json(input_path))
        wrapped = isinstance(data, dict) and "editorState" in data
        try:
            if wrapped:
                state = EditorState.model_validate(data["editorState"])
                result = {"editorState": state.to_dict()}
            else:
                result = RootNode.model_validate(data).model_dump(mode="json", by_alias=True)
        except ValidationError as exc:
            raise ParseError(f"Invalid Lexical content in {input_path}: {exc}") from exc

        self.write_json(result, output_path)
        return Path(output_path)

    def proposal(self, input_path: Path, output_path: Path) -> Path:
        """Convert every Draft document embedded in a proposal JSON file.

        Only the ``draft`` member of the proposal is searched.
        """
        proposal = self.load_json(input_path)
        if not isinstance(proposal, dict) or not isinstance(proposal.get("draft"), dict):
            raise ConversionError(f"No 'draft' object in proposal {input_path}")

        proposal["draft"] = self.converter.convert_embedded(proposal["draft"], path="$.draft")
        self.write_json(proposal, output_path)
        return Path(output_path)

    @staticmethod
    def load_json(path: Path) -> Any:
        """Read a JSON file."""
        path = Path(path)
        logger.info("Loading %s", path)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ParseError(f"Input file not found: {path}")
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ParseError(f"Invalid JSON in {path}: {exc}") from exc

    def write_json(self, data: Any, path: Path) -> Path:
        """Write JSON using the configured indentation."""
        path = Path(path)
        logger.info("Saving %s", path)
        path.write_text(
            json.dumps(data, indent=self.config.output.indent, ensure_ascii=False),
            encoding="utf-8",
        )
        return path
