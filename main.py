import math
import sys

from rich.pretty import pprint

from optline import *

__prog__ = "main.py"

parser = Parser()
rounded = {"up": 0, "down": 0}


@parser.option("up", "Round a value up.")
def round_up(value):
    pprint(("roundup", value))
    rounded["up"] = math.ceil(float(value))


@parser.option("down|d", "Round a value down.")
def round_down(value):
    pprint(("rounddown", value))
    rounded["down"] = math.floor(float(value))


dub = parser.store("dub", float, 0.0, description="A double value.")


@parser.flag("b|p|q", "Shout.")
def bang():
    print("!!")


file = parser.store("file|in|f", description="Input file.")


if __name__ == '__main__':
    try:
        result = parser.parse_argv_inplace(sys.argv)
    except OptlineException as fault:
        report(fault)
        sys.exit(1)
    if isinstance(result, EarlyExit):
        sys.exit(result.status)
    pprint(result)
    pprint({"ru": rounded["up"], "rd": rounded["down"], "d": dub.value, "f": file.value})
