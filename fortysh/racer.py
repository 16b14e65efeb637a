"""Driver for a lidar-guided car simulation spoken to over standard streams."""

import re
import sys

_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def count(text, char):
    """Return how many times ``char`` occurs in ``text``."""
    return text.count(char)


def split_fields(text, separators):
    """Split ``text`` on any of ``separators``, dropping empty fields."""
    if not separators:
        return [text] if text else []
    pattern = "[" + re.escape(separators) + "]"
    return [field for field in re.split(pattern, text) if field]


def extract(text):
    """Return the lidar readings part of a response, from the third colon on."""
    result = []
    colons = 0
    index = 0
    while index < len(text):
        if text[index] == ":":
            colons += 1
        if colons == 3:
            index += 1
        if colons == 35:
            break
        if colons >= 3:
            if index >= len(text):
                break
            result.append(text[index])
        index += 1
    return "".join(result)


def _atof(text):
    match = _NUMBER.match(text)
    return float(match.group()) if match else 0.0


def _field(fields, index):
    try:
        return _atof(fields[index])
    except IndexError:
        raise ValueError(f"lidar response has no field {index}") from None


def steering_command(left, right, fields):
    """Return the wheel command for the measured sides, or None to go straight."""
    distance = _field(fields, 19)
    if left > right and distance <= 200.0:
        return "wheels_dir: 0.50\n"
    if left < right and distance <= 200.0:
        return "wheels_dir: -0.50\n"
    if left > right and distance <= 1000.0:
        return "wheels_dir: 0.25\n"
    if left < right and distance <= 1000.0:
        return "wheels_dir: -0.25\n"
    return None


def _stop_requested(field):
    return len(field) > 2 and field[2] == "0"


class Simulation:
    """Talks to the simulator: commands go out, replies are echoed to stderr."""

    def __init__(self, stdin, stdout, stderr):
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr

    def _send(self, command):
        self.stdout.write(command)
        self.stdout.flush()

    def acknowledge(self):
        """Read one reply, echo it to stderr and return it."""
        reply = self.stdin.readline()
        if not reply:
            raise EOFError("simulator closed its output")
        self.stderr.write(reply)
        return reply

    def start(self):
        """Start the simulation and set the car moving."""
        self._send("start_simulation\n")
        self.acknowledge()
        self._send("car_forward: 0.5\n")
        self.acknowledge()

    def query_lidar(self):
        """Ask for lidar data, slow down if the road ahead is short, return fields."""
        self._send("get_info_lidar\n")
        fields = split_fields(self.acknowledge(), ":")
        if _field(fields, 15) <= 1000.0:
            self._send("car_forward: 0.1\n")
            self.acknowledge()
        return fields

    def move(self, left, right, fields):
        """Adjust speed and steering from the side distances."""
        if abs(left - right) < 200.0 and _field(fields, 19) >= 500.0:
            self._send("car_forward: 0.3\n")
            self.acknowledge()
        if left <= 100.0:
            self._send("wheels_dir: 0.50\n")
        elif right <= 100.0:
            self._send("wheels_dir: -0.50\n")
        else:
            self._send(steering_command(left, right, fields) or "wheels_dir: 0\n")

    def run(self):
        """Drive until the simulator stops answering; return the exit status."""
        try:
            self.start()
            turn = 0
            while True:
                fields = self.query_lidar()
                if turn and len(fields) > 36 and _stop_requested(fields[36]):
                    return 1
                self.move(_field(fields, 3), _field(fields, 34), fields)
                self.acknowledge()
                turn += 1
        except EOFError:
            return 0


def main(argv=None):
    """Run the driver on the process's standard streams."""
    return Simulation(sys.stdin, sys.stdout, sys.stderr).run()