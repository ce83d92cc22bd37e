"""The iniconf command line tool."""
