# pos_sdk/utils/__init__.py
