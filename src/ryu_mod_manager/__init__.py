"""Ryu Mod Manager CLI - launch-time mod orchestrator for Yakuza / Like a Dragon games.

This application provides:
    - Persistent ini configuration with automatic version upgrades
    - Mod load order resolution from ModLoadOrder.txt or the external mods folder
    - Invocation of the installed mod packaging engine
    - Game specific loader fixups and executable integrity warnings
    - A background update check against the project's GitHub releases

The tool runs from the game installation directory. Every file it reads or
writes (YakuzaParless.ini, ModLoadOrder.txt, the mods folder) is resolved
relative to that directory.

Package Structure:
    app: Main application entry point and orchestrator
    console: Buffered/immediate console output
    config: Ini configuration management, paths and schema
    core: Manifest resolution, game detection, patches, update check, engine seam

Quick Start:
    Run from the game directory::

        python -m ryu_mod_manager

    Or programmatically::

        from ryu_mod_manager.app import main
        main()

Configuration:
    - Config file: <game dir>/YakuzaParless.ini
    - Load order: <game dir>/ModLoadOrder.txt
    - Log file: <game dir>/RyuModManager.log (only written with --debug)
"""

__version__ = "v1.7"
__app_name__ = "Ryu Mod Manager CLI"
__author__ = "SutandoTsukai181"
__repo__ = "RyuModManager"
