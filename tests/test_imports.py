from __future__ import annotations

import importlib

import pytest

MODULES = [
    "intfic.core.config",
    "intfic.core.types",
    "intfic.data.errors",
    "intfic.data.paths",
    "intfic.data.story_loader",
    "intfic.data.story_parser",
    "intfic.data.repositories.story_repo",
    "intfic.domain.defs.story_def",
    "intfic.domain.state",
    "intfic.domain.text_directives",
    "intfic.services.choice_matcher",
    "intfic.services.dictionaries",
    "intfic.services.input_parsing",
    "intfic.services.save_service",
    "intfic.services.story_graph_validator",
    "intfic.services.story_service",
    "intfic.presentation.cli.app",
    "intfic.presentation.cli.config",
    "intfic.presentation.cli.render",
    "intfic.presentation.cli.save_store",
    "intfic.main",
]


@pytest.mark.parametrize("module_name", MODULES)
def test_module_imports(module_name: str) -> None:
    importlib.import_module(module_name)


def test_package_exposes_version() -> None:
    import intfic

    assert intfic.__version__
