# module_scripts/__main__.py
# -*- coding: utf-8 -*-
from module_scripts.cli import main

main()
