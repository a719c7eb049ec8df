"""
报告存储 - 读取对比报告（目录或zip归档）中的JSON文件和提交文件
提交文件读取一次后保存在内存中
"""
from __future__ import annotations

import json
import threading
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from report_viewer.core.errors import MalformedInputError, ReportFileNotFoundError, ResourceNotFoundError
from report_viewer.core.logging import LogEvent, get_logger
from report_viewer.models.comparison import SubmissionFile
from report_viewer.utils.paths import to_slash

logger = get_logger(__name__)


def _decode(raw: bytes) -> str:
    # UTF-8（可带BOM）优先，latin-1 兜底（任意字节都能解码）
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


class ReportStore:
    """Read access to a comparison report.

    The report is either a directory or a ``.zip`` archive holding
    ``overview.json``, one JSON file per comparison,
    ``submissionFileIndex.json`` and the submitted sources under ``files/``.
    """

    OVERVIEW_FILE = "overview.json"
    SUBMISSION_FILE_INDEX = "submissionFileIndex.json"
    FILES_DIR = "files"

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self._archive: Optional[zipfile.ZipFile] = None
        self._prefix = ""
        self._lock = threading.Lock()
        self._overview: Optional[Dict[str, Any]] = None
        self._file_index: Optional[Dict[str, Any]] = None
        self._submission_files: Dict[str, Dict[str, SubmissionFile]] = {}

        if self.root.suffix.lower() == ".zip":
            self._open_archive()
        elif not self.root.is_dir():
            raise ReportFileNotFoundError(str(self.root))

        logger.info(LogEvent.REPORT_OPENED, root=str(self.root), archive=self.is_archive)

    @property
    def is_archive(self) -> bool:
        return self._archive is not None

    def _open_archive(self) -> None:
        try:
            self._archive = zipfile.ZipFile(self.root)
        except FileNotFoundError:
            raise ReportFileNotFoundError(str(self.root))
        except zipfile.BadZipFile as e:
            raise MalformedInputError(str(e), source=str(self.root))

        # 归档内容可能位于一个顶层目录下
        candidates = [
            name for name in self._archive.namelist()
            if name == self.OVERVIEW_FILE or name.endswith("/" + self.OVERVIEW_FILE)
        ]
        if candidates:
            shortest = min(candidates, key=len)
            self._prefix = shortest[: -len(self.OVERVIEW_FILE)]

    def close(self) -> None:
        if self._archive is not None:
            self._archive.close()
            self._archive = None

    def __enter__(self) -> ReportStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # raw access
    # ------------------------------------------------------------------

    def read_text(self, relative_path: str) -> str:
        """Read a report entry as text."""
        relative_path = to_slash(relative_path)
        if self._archive is not None:
            with self._lock:
                try:
                    raw = self._archive.read(self._prefix + relative_path)
                except KeyError:
                    logger.debug(LogEvent.REPORT_FILE_MISSING, path=relative_path)
                    raise ReportFileNotFoundError(relative_path)
            return _decode(raw)

        path = self.root / relative_path
        if not path.is_file():
            logger.debug(LogEvent.REPORT_FILE_MISSING, path=relative_path)
            raise ReportFileNotFoundError(relative_path)
        return _decode(path.read_bytes())

    def read_json(self, relative_path: str) -> Any:
        try:
            return json.loads(self.read_text(relative_path))
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"invalid JSON ({e.msg})", source=relative_path)

    def _read_json_object(self, relative_path: str) -> Dict[str, Any]:
        data = self.read_json(relative_path)
        if not isinstance(data, dict):
            raise MalformedInputError("expected a JSON object", source=relative_path)
        return data

    @property
    def overview(self) -> Dict[str, Any]:
        if self._overview is None:
            self._overview = self._read_json_object(self.OVERVIEW_FILE)
        return self._overview

    @property
    def submission_file_index(self) -> Dict[str, Any]:
        if self._file_index is None:
            self._file_index = self._read_json_object(self.SUBMISSION_FILE_INDEX)
        return self._file_index

    # ------------------------------------------------------------------
    # lookups
    # ------------------------------------------------------------------

    def get_comparison_file_name(self, first_id: str, second_id: str) -> Optional[str]:
        """Name of the comparison file for a submission pair, in either order."""
        mapping = self._comparison_file_names()
        name = mapping.get(first_id, {}).get(second_id)
        if name is None:
            name = mapping.get(second_id, {}).get(first_id)
        return name

    def _comparison_file_names(self) -> Dict[str, Dict[str, Any]]:
        field = "submission_ids_to_comparison_file_name"
        mapping = self.overview.get(field) or {}
        if not isinstance(mapping, dict) or not all(isinstance(v, dict) for v in mapping.values()):
            raise MalformedInputError(
                "expected a mapping of submission id to comparison files",
                source=self.OVERVIEW_FILE,
                field=field,
            )
        return mapping

    def get_submission_file_list(self, submission_id: str) -> List[str]:
        indexes = self.submission_file_index.get("submission_file_indexes")
        if not isinstance(indexes, dict):
            raise MalformedInputError(
                "missing submission file indexes",
                source=self.SUBMISSION_FILE_INDEX,
                field="submission_file_indexes",
            )
        if submission_id not in indexes:
            raise ResourceNotFoundError("Submission", submission_id)
        # 兼容文件列表和 {文件路径: 元数据} 两种格式
        return [to_slash(name) for name in indexes[submission_id]]

    def load_submission_files(self, submission_id: str) -> None:
        """Read every file of a submission into memory.

        A submission whose files cannot be read keeps what was loaded so far;
        the comparison is still usable without source text.
        """
        if submission_id in self._submission_files:
            return

        files: Dict[str, SubmissionFile] = {}
        try:
            for file_name in self.get_submission_file_list(submission_id):
                files[file_name] = SubmissionFile(
                    submission_id=submission_id,
                    file_name=file_name,
                    data=self.read_text(f"{self.FILES_DIR}/{file_name}"),
                )
        except (ResourceNotFoundError, MalformedInputError) as e:
            logger.warning(
                LogEvent.SUBMISSION_FILES_FAILED,
                submission_id=submission_id,
                loaded=len(files),
                error=e.message,
            )
        else:
            logger.debug(LogEvent.SUBMISSION_FILES_LOADED, submission_id=submission_id, files=len(files))
        self._submission_files[submission_id] = files

    def files_of_submission(self, submission_id: str) -> List[SubmissionFile]:
        return list(self._submission_files.get(submission_id, {}).values())
