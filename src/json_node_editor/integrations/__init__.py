"""Integrations subpackage for json-node-editor.

The pytest plugin (``_pytest_plugin``) is loaded by pytest through the
``pytest11`` entry point and is not imported here, so importing
``json_node_editor`` never pulls in pytest.
"""
