# pos_sdk/cli/commands/__init__.py
