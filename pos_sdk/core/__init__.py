# pos_sdk/core/__init__.py
