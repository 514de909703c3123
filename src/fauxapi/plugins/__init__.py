"""Plugins — the single extension point of the engine.

A plugin is any object with a ``name`` and a ``process(context, response)``
method, plus an optional ``on_error(error, context)`` hook. Plugins run in
registration order through ``PluginPipeline``.
"""
