"""
Calendar announcement bot: slash commands that write to the shared Google
Calendar and keep one announcement message per event in Discord.
"""
