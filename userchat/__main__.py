"""Allow `python -m userchat`."""

from userchat.main import main

main()
