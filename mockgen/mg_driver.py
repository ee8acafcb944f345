#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, Optional

from mg_context import GenerationContext
from mg_declarations import DeclarationSet
from mg_emitter import MockGenerator
from mg_errors import GeneratorError
from mg_logger import log_debug, log_error, log_info, log_stage


class MockDriver:
    """
    Mock generation driver:
      - look up the requested interface in the parsed declarations
      - emit the optional prologue and note
      - emit the mock type and its methods

    Entry points:
      - generate(name): text for one interface.
      - generate_all(names): text for many interfaces, optionally on a worker pool.
    """

    def __init__(
        self,
        declarations: DeclarationSet,
        context: GenerationContext | None = None,
    ):
        self.declarations = declarations
        self.context = context or GenerationContext.default()

    # --- Public API ---

    def generator_for(self, name: str) -> MockGenerator:
        """Raises NotFoundError if `name` is not a parsed interface."""
        iface = self.declarations.find(name)
        return MockGenerator(iface, self.declarations, self.context)

    def generate(self, name: str, package: Optional[str] = None, note: Optional[str] = None) -> str:
        """
        Generate the mock for interface `name`.

          1. Find the interface (NotFoundError propagates).
          2. Plan parameter names and imports.
          3. Emit prologue (if `package` is given) and note (if given).
          4. Emit the mock type and its methods.
        """
        log_stage(self.context, "Generating mock for", name)
        gen = self.generator_for(name)

        log_stage(self.context, "Planning imports for", name)
        gen.plan()
        log_debug(self.context, f"Mock type for '{name}' is '{gen.mock_name}'")

        if package:
            gen.generate_prologue(package)
        if note:
            gen.generate_prologue_note(note)
        gen.generate()

        text = gen.get_output()
        log_info(self.context, f"Generated {len(gen.iface.methods)} method(s) for '{name}'")
        return text

    def generate_all(
        self,
        names: Iterable[str] | None = None,
        package: Optional[str] = None,
        jobs: int = 1,
    ) -> Dict[str, str]:
        """
        Generate mocks for several interfaces (all parsed ones by default).

        Interfaces share no state, so `jobs > 1` renders them on a thread pool.
        The first failure is logged and re-raised.
        """
        selected = sorted(names) if names is not None else self.declarations.names()
        log_stage(self.context, f"Generating {len(selected)} mock(s)")

        def _one(name: str) -> str:
            try:
                return self.generate(name, package=package)
            except GeneratorError as e:
                log_error(self.context, e.format())
                raise

        if jobs <= 1:
            return {name: _one(name) for name in selected}

        with ThreadPoolExecutor(max_workers=jobs) as pool:
            texts = list(pool.map(_one, selected))
        return dict(zip(selected, texts))
