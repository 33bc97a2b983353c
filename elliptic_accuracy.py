#!/usr/bin/env python3

import sys
import numpy as np
import ellipint.accuracy as acc

def print_usage():

    print("Usage: elliptic_accuracy <function> [nplot] [mmin] [mmax] [npts] [phi]\n\
   <function> - cel1, cel2, el1 or el2\n\
   [nplot] - 0: no plot, 1:xwindow 2:png+x 3:png\n\
   [mmin] - lowest parameter m to scan, -1 for default\n\
   [mmax] - highest parameter m to scan, -1 for default\n\
   [npts] - number of points in the scan\n\
   [phi]  - amplitude (radians) for el1 and el2\n\
    ")

    exit(0)

# Get the command-line arguments
args = sys.argv

nargs = len(args)

if nargs <= 1:
    print_usage()

acc_inputs = acc.accuracy_inputs_class()

#Get function
if args[1] not in acc.function_names:
    print("<function> must be one of " + ", ".join(acc.function_names))
    print_usage()
acc_inputs.function = args[1]
acc_inputs.filename = "accuracy_" + args[1] + ".png"

if nargs > 2:
    arg = int(args[2])
    if (arg >= 0) & (arg < 4):
        acc_inputs.plots = arg
    else:
        print("[nplot] must be either 0, 1, 2 or 3.")

if nargs > 3:
    arg = float(args[3])
    if arg != -1:
        acc_inputs.mmin = arg

if nargs > 4:
    arg = float(args[4])
    if arg != -1:
        acc_inputs.mmax = arg

if acc_inputs.mmin > acc_inputs.mmax:
    print("mmax must be greater than mmin")
    exit(-1)

if acc_inputs.mmax > 1:
    print("Warning: m > 1 is outside the domain, those points will be NaN")

if nargs > 5:
    arg = int(args[5])
    if arg > 1:
        acc_inputs.npts = arg
    else:
        print("npts must be greater than one")

if nargs > 6:
    arg = float(args[6])
    if abs(arg) <= 0.5*np.pi:
        acc_inputs.phi = arg
    else:
        print("phi must be in [-pi/2, pi/2]")

acc_ans = acc.sweep(acc_inputs)

#Dump output to stdout.
print(acc_inputs.function, acc_ans.worst_m, acc_ans.worst_ulp, np.nanmedian(acc_ans.ulp), acc_ans.nfail)

exit(0)
