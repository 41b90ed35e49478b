#!/usr/bin/env python3
"""
Toy deformation model standing in for an external simulation program.

Reads ``name = value`` lines from the file given on the command line and
prints the squared misfit against a reference deformation on its last
output line.
"""
import sys

import numpy as np

REFERENCE = {"stiffness": 12.0, "damping": 0.8, "preload": 3.0}


def read_parameters(path):
    params = {}
    with open(path) as f:
        for line in f:
            line = line.split("#")[0].strip()
            if "=" in line:
                name, value = line.split("=")
                params[name.strip()] = float(value)
    return params


def deformation(params, load):
    return params["preload"] + load / (params["stiffness"] + params["damping"] * load)


def main():
    params = read_parameters(sys.argv[1])
    loads = np.linspace(0.0, 10.0, 21)
    target = deformation(REFERENCE, loads)
    model = deformation(params, loads)
    print(f"evaluated {len(loads)} load cases")
    print(float(np.sum((model - target) ** 2)))


if __name__ == "__main__":
    main()
