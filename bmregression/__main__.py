from bmregression.cli import entry_point

entry_point()
