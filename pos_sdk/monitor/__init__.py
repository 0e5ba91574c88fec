# pos_sdk/monitor/__init__.py
