'''
Strips tracking parameters from urls copied to the clipboard.

See clipboard_sanitizer.cannon for the rules and clipboard_sanitizer.monitor for the polling loop.
'''
