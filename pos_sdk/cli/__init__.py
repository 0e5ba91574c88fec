# pos_sdk/cli/__init__.py
