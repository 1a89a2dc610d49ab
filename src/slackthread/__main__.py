"""python -m slackthread 진입점"""

from slackthread.main import run

run()
