# sharetriage/base: configuration (config.py) and structured errors (errors.py).
