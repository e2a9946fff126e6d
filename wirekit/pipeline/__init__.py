"""Pipeline stages that rewrite a circuit's wire network.

  beautify   — remove pin stubs and dead branches, collapse C-detours
"""
