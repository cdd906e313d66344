"""Tests para el escaneo del catálogo."""

import logging
import tempfile
from pathlib import Path

import pytest

from react_learning.core.catalog import (
    find_by_slug,
    next_sequence_number,
    parse_front_matter,
    parse_sequence,
    read_readme_metadata,
    scan_catalog,
)
from react_learning.core.exercise import ExerciseSpec


class TestScanCatalog:
    """Tests para scan_catalog."""

    def test_missing_root_returns_empty(self) -> None:
        """Test raíz inexistente."""
        with tempfile.TemporaryDirectory() as tmpdir:
            assert scan_catalog(Path(tmpdir) / "exercises") == []

    def test_empty_topic_yields_no_records(self, tmp_path: Path) -> None:
        """Test tema vacío."""
        (tmp_path / "01-fundamentals").mkdir()
        assert scan_catalog(tmp_path) == []

    def test_sorted_by_full_name(self, tmp_path: Path, make_exercise) -> None:
        """Test orden lexicográfico topic/name."""
        make_exercise(tmp_path, "02-hooks", "01-usestate-basics")
        make_exercise(tmp_path, "01-fundamentals", "02-broken-counter")
        make_exercise(tmp_path, "01-fundamentals", "01-hello-component")

        records = scan_catalog(tmp_path)

        assert [r.full_name for r in records] == [
            "01-fundamentals/01-hello-component",
            "01-fundamentals/02-broken-counter",
            "02-hooks/01-usestate-basics",
        ]
        assert records[0].path == tmp_path / "01-fundamentals" / "01-hello-component"

    def test_skips_files_and_hidden_dirs(self, tmp_path: Path, make_exercise) -> None:
        """Test archivos sueltos y staging ocultos se ignoran."""
        make_exercise(tmp_path, "01-fundamentals", "01-hello")
        (tmp_path / "README.md").write_text("root", encoding="utf-8")
        (tmp_path / "01-fundamentals" / "notes.txt").write_text("x", encoding="utf-8")
        (tmp_path / "01-fundamentals" / ".staging-02-foo-abc").mkdir()

        records = scan_catalog(tmp_path)

        assert [r.name for r in records] == ["01-hello"]

    def test_require_manifest_filters(self, tmp_path: Path, make_exercise) -> None:
        """Test filtro por package.json."""
        make_exercise(tmp_path, "01-fundamentals", "01-hello")
        make_exercise(tmp_path, "01-fundamentals", "02-empty", files=())

        assert len(scan_catalog(tmp_path)) == 2
        assert [r.name for r in scan_catalog(tmp_path, require_manifest=True)] == ["01-hello"]

    def test_metadata_from_bold_markers(self, tmp_path: Path, make_exercise) -> None:
        """Test dificultad y tipo desde marcadores en negrita."""
        make_exercise(tmp_path, "01-fundamentals", "01-hello")

        record = scan_catalog(tmp_path)[0]

        assert record.difficulty == "beginner"
        assert record.type == "Fix Broken Code"

    def test_missing_readme_gives_empty_fields(self, tmp_path: Path, make_exercise) -> None:
        """Test sin README los campos quedan vacíos."""
        make_exercise(tmp_path, "01-fundamentals", "01-hello", readme=None)

        record = scan_catalog(tmp_path)[0]

        assert record.difficulty == ""
        assert record.type == ""
        assert record.title == ""

    def test_unreadable_topic_does_not_abort(
        self,
        tmp_path: Path,
        make_exercise,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test un tema ilegible no detiene el escaneo."""
        make_exercise(tmp_path, "01-fundamentals", "01-hello")
        make_exercise(tmp_path, "02-hooks", "01-usestate")
        make_exercise(tmp_path, "03-styling", "01-css-basics")
        locked = tmp_path / "02-hooks"
        real_iterdir = Path.iterdir

        def iterdir(self):
            if self == locked:
                raise PermissionError(13, "Permission denied", str(self))
            return real_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", iterdir)

        with caplog.at_level(logging.WARNING, logger="react_learning"):
            records = scan_catalog(tmp_path)

        assert [r.full_name for r in records] == [
            "01-fundamentals/01-hello",
            "03-styling/01-css-basics",
        ]
        assert "02-hooks" in caplog.text


class TestReadmeMetadata:
    """Tests para la lectura de metadata del README."""

    def test_front_matter_preferred(self, tmp_path: Path) -> None:
        """Test el front matter YAML tiene prioridad."""
        readme = tmp_path / "README.md"
        readme.write_text(
            '---\ntitle: "Props Demo"\ndifficulty: intermediate\ntype: complete-missing\n'
            'estimated_time: "20-25 minutes"\n---\n\n**Difficulty:** beginner\n',
            encoding="utf-8",
        )

        metadata = read_readme_metadata(readme)

        assert metadata == {
            "title": "Props Demo",
            "difficulty": "intermediate",
            "type": "complete-missing",
            "estimated_time": "20-25 minutes",
        }

    def test_malformed_front_matter_falls_back(self, tmp_path: Path) -> None:
        """Test front matter inválido usa los marcadores."""
        readme = tmp_path / "README.md"
        readme.write_text(
            "---\ntitle: [unclosed\n---\n\n**Difficulty:** advanced\n**Type:** Build From Scratch\n",
            encoding="utf-8",
        )

        metadata = read_readme_metadata(readme)

        assert metadata["difficulty"] == "advanced"
        assert metadata["type"] == "Build From Scratch"

    def test_parse_front_matter_requires_leading_block(self) -> None:
        """Test sin bloque inicial no hay front matter."""
        assert parse_front_matter("# Title\n---\na: 1\n---\n") is None
        assert parse_front_matter("---\na: 1\n---\n") == {"a": 1}
        assert parse_front_matter("---\n- a\n---\n") is None


class TestSequenceNumbers:
    """Tests para numeración de ejercicios."""

    def test_missing_topic_starts_at_one(self, tmp_path: Path) -> None:
        """Test tema inexistente."""
        assert next_sequence_number(tmp_path / "nope") == 1

    def test_max_plus_one(self, tmp_path: Path) -> None:
        """Test máximo + 1 ignorando nombres sin número."""
        for name in ["01-hello", "07-lists", "03-props", "intro", ".staging-09-x"]:
            (tmp_path / name).mkdir()

        assert next_sequence_number(tmp_path) == 8

    def test_only_unnumbered_dirs(self, tmp_path: Path) -> None:
        """Test solo directorios sin número."""
        (tmp_path / "intro").mkdir()
        assert next_sequence_number(tmp_path) == 1

    def test_parse_sequence(self) -> None:
        """Test prefijo numérico inicial."""
        assert parse_sequence("03-props-demo") == 3
        assert parse_sequence("12x-foo") == 12
        assert parse_sequence("intro-01") is None

    def test_find_by_slug(self, tmp_path: Path) -> None:
        """Test buscar ejercicio por slug."""
        (tmp_path / "03-props-demo").mkdir()
        (tmp_path / "04-props-demo-two").mkdir()

        assert find_by_slug(tmp_path, "props-demo") == tmp_path / "03-props-demo"
        assert find_by_slug(tmp_path, "props") is None


class TestExerciseSpec:
    """Tests para ExerciseSpec."""

    def test_from_dict_batch_keys(self) -> None:
        """Test claves del archivo de lote."""
        spec = ExerciseSpec.from_dict(
            {
                "topic": "03-styling",
                "name": "tailwind-basics",
                "title": "Tailwind CSS Fundamentals",
                "type": "fix-broken",
                "difficulty": "beginner",
                "time": "20-25 minutes",
                "deps": ["tailwindcss", "postcss"],
            }
        )

        assert spec.slug == "tailwind-basics"
        assert spec.estimated_time == "20-25 minutes"
        assert spec.deps == ["tailwindcss", "postcss"]

    def test_from_dict_defaults(self) -> None:
        """Test valores por defecto."""
        spec = ExerciseSpec.from_dict(
            {"topic": "02-hooks", "slug": "x", "type": "fix-broken", "difficulty": "beginner"}
        )

        assert spec.title == ""
        assert spec.estimated_time == "15-20 minutes"
        assert spec.deps == []

    def test_from_dict_null_fields(self) -> None:
        """Test campos vacíos en YAML (null) usan los valores por defecto."""
        spec = ExerciseSpec.from_dict(
            {
                "topic": "02-hooks",
                "name": "x",
                "title": None,
                "type": "fix-broken",
                "difficulty": "beginner",
                "time": None,
                "deps": None,
            }
        )

        assert spec.title == ""
        assert spec.estimated_time == "15-20 minutes"
        assert spec.deps == []
