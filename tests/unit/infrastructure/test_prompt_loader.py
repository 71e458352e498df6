"""
Name: Prompt Loader Unit Tests

Responsibilities:
  - Test PromptLoader version selection and composition
  - Test frontmatter parsing
  - Test template formatting

Notes:
  - Uses tmp_path for isolated prompt trees
"""

import pytest

from cardsmith.infrastructure.prompts.loader import PromptLoader, parse_frontmatter


def _write_prompts(root, template_body="Segment:\n{text}\n"):
    (root / "policy").mkdir()
    (root / "segmentation").mkdir()
    (root / "policy" / "editor_contract_en.md").write_text(
        "---\ntype: policy\nversion: v1\n---\nPOLICY\n", encoding="utf-8"
    )
    (root / "segmentation" / "v1_en.md").write_text(
        "---\ntype: segmentation\nversion: v1\ninputs:\n  - text\n---\n" + template_body,
        encoding="utf-8",
    )


@pytest.mark.unit
class TestPromptLoader:
    """Test suite for PromptLoader class."""

    def test_loader_default_version(self):
        """R: Should default to v1 version."""
        assert PromptLoader().version == "v1"

    def test_loader_rejects_invalid_version(self):
        """R: Should reject versions that could traverse paths."""
        with pytest.raises(ValueError):
            PromptLoader(version="../v1")

    def test_packaged_template_has_text_token(self):
        """R: Should load the packaged policy + v1 template."""
        template = PromptLoader().get_template()

        assert "{text}" in template
        assert "NO REDUNDANCY" in template
        assert not template.startswith("---")

    def test_policy_comes_before_template(self, tmp_path):
        _write_prompts(tmp_path)
        loader = PromptLoader(prompts_dir=tmp_path)

        template = loader.get_template()

        assert template.index("POLICY") < template.index("Segment:")
        assert loader.metadata.inputs == ["text"]

    def test_loader_caches_template(self, tmp_path):
        _write_prompts(tmp_path)
        loader = PromptLoader(prompts_dir=tmp_path)

        assert loader.get_template() is loader.get_template()

    def test_format_replaces_text(self, tmp_path):
        _write_prompts(tmp_path)

        prompt = PromptLoader(prompts_dir=tmp_path).format("Hello {world}")

        assert "Hello {world}" in prompt
        assert "{text}" not in prompt

    def test_format_requires_text_token(self, tmp_path):
        _write_prompts(tmp_path, template_body="No token here\n")

        with pytest.raises(ValueError):
            PromptLoader(prompts_dir=tmp_path).format("x")

    def test_missing_version_falls_back_to_v1(self, tmp_path):
        _write_prompts(tmp_path)

        template = PromptLoader(version="v9", prompts_dir=tmp_path).get_template()

        assert "Segment:" in template

    def test_missing_template_raises(self, tmp_path):
        (tmp_path / "policy").mkdir()
        (tmp_path / "policy" / "editor_contract_en.md").write_text("P", encoding="utf-8")

        with pytest.raises(FileNotFoundError):
            PromptLoader(prompts_dir=tmp_path).get_template()


@pytest.mark.unit
def test_parse_frontmatter():
    meta, body = parse_frontmatter(
        "---\ntype: segmentation\nversion: v2\ndescription: \"x\"\n---\nBody\n"
    )

    assert meta.type == "segmentation"
    assert meta.version == "v2"
    assert meta.description == "x"
    assert body == "Body\n"


@pytest.mark.unit
def test_parse_frontmatter_without_header():
    meta, body = parse_frontmatter("Just text")

    assert meta.version == ""
    assert body == "Just text"
