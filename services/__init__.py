"""
Services package for the FBI bot.

Business logic lives here, independent of the cogs that expose it as slash
commands: persistence, the repeat scheduler, the confirmation gate, the
training result wizard and the command dispatcher.
"""
