# Core modules for abr_explorer
