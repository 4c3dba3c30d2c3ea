"""modeldef test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Shared behavior/invariants enforced across port implementations.
- e2e/          : The ``modeldef`` command driven through click's CliRunner.
- fixtures/     : Fixture modules loaded via ``pytest_plugins``.
- helpers/      : Shared models and fakes (no tests here).

General guidance
- Checks never touch a database; models are transient instances.
- The contract checks mutate the instance they inspect: always pass a fresh one.
- Contract parametrizes implementations to ensure consistent behavior.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
