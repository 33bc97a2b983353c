import os
import concurrent.futures

import numpy as np

import matplotlib as mpl
import matplotlib.pyplot as plt

from tqdm import tqdm

from scipy import special

from ellipint.ascending import ConvergenceError
from ellipint.complete import cel1, cel2
from ellipint.incomplete import el1, el2

EPS32 = np.finfo(np.float32).eps   # errors are reported in single precision ULPs

function_names = ["cel1", "cel2", "el1", "el2"]

class accuracy_inputs_class:
    def __init__(self):
        self.function = "cel1"
        self.mmin     = 0.0
        self.mmax     = 0.999
        self.npts     = 1000
        self.phi      = 0.25*np.pi   # amplitude used by el1 and el2 (radians)
        self.filename = "accuracy_cel1.png"
        self.plots    = 0    # 0 = no plots, 1 = X11, 2 = PNG+X11, 3 = PNG
        self.multipro = 0    # 0 = single thread, 1 = multiprocessing

class accuracy_ans_class:
    def __init__(self):
        self.m         = None
        self.values    = None
        self.reference = None
        self.ulp       = None
        self.nfail     = 0
        self.worst_m   = np.nan
        self.worst_ulp = -1.0

def evaluate(function, m, phi):
    """
    Evaluates one of the integrals of the library at a single point
    """

    if function == "cel1":
        return cel1(m)
    elif function == "cel2":
        return cel2(m)
    elif function == "el1":
        return el1(phi, m)
    elif function == "el2":
        return el2(np.sin(phi), m)

    raise ValueError(f"Unknown function: {function}")

def reference(function, m, phi):
    """
    Reference values from scipy.special for an array of m
    """

    if function == "cel1":
        return special.ellipk(m)
    elif function == "cel2":
        return special.ellipe(m)
    elif function == "el1":
        return special.ellipkinc(phi, m)
    elif function == "el2":
        return special.ellipeinc(phi, m)

    raise ValueError(f"Unknown function: {function}")

def ulp_error(values, ref):
    """
    Relative error in units of the single precision machine epsilon.
    Matching infinities count as exact.
    """

    with np.errstate(invalid='ignore', divide='ignore'):
        err = np.abs(values - ref) / (np.abs(ref) * EPS32)

    return np.where(values == ref, 0.0, err)

def compute_chunk(function, m, phi):
    """
    Evaluates the integral on an array of m. Points where the ascending
    transformation fails are left as NaN and counted.
    """

    values = np.full(len(m), np.nan)
    nfail = 0

    for i in range(len(m)):
        try:
            values[i] = evaluate(function, m[i], phi)
        except ConvergenceError:
            nfail += 1

    return values, nfail

def sweep(inputs):
    """
    Compares the library against scipy.special on a grid of m.

    inputs: accuracy_inputs_class object
    Returns an accuracy_ans_class object
    """

    if inputs.function not in function_names:
        raise ValueError(f"Unknown function: {inputs.function}")

    ans = accuracy_ans_class()
    ans.m = np.linspace(inputs.mmin, inputs.mmax, inputs.npts)

    if inputs.multipro == 0:
        ans.values = np.full(inputs.npts, np.nan)

        for i in tqdm(range(inputs.npts)):
            try:
                ans.values[i] = evaluate(inputs.function, ans.m[i], inputs.phi)
            except ConvergenceError:
                ans.nfail += 1

    else:
        max_processes = os.cpu_count()
        chunks = np.array_split(np.arange(inputs.npts), max_processes)

        ans.values = np.full(inputs.npts, np.nan)

        with concurrent.futures.ProcessPoolExecutor(max_workers=max_processes) as executor:
            futures = {executor.submit(compute_chunk, inputs.function, ans.m[idx], inputs.phi): i \
                       for i, idx in enumerate(chunks)}

            for future in tqdm(concurrent.futures.as_completed(futures), total=len(futures)):
                i = futures[future]
                try:
                    values, nfail = future.result()
                    ans.values[chunks[i]] = values
                    ans.nfail += nfail
                except Exception as exc:
                    print(f'Generated an exception: {exc}')

    if ans.nfail > 0:
        print(f"Warning: {ans.nfail} points did not converge")

    ans.reference = reference(inputs.function, ans.m, inputs.phi)
    ans.ulp = ulp_error(ans.values, ans.reference)

    if not np.all(np.isnan(ans.ulp)):
        iworst = np.nanargmax(ans.ulp)
        ans.worst_m = ans.m[iworst]
        ans.worst_ulp = ans.ulp[iworst]

    if inputs.plots > 0:
        plotAccuracy(ans, inputs)

    return ans

def plotAccuracy(ans, inputs):
    """
    Plots the integral and its error against scipy.special

    ans: accuracy_ans_class object returned by sweep()
    inputs: accuracy_inputs_class object
    """

    mpl.rcParams.update({'font.size': 14})
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 8), sharex=True)

    ax1.plot(ans.m, ans.reference, c="red", lw=3.0, label="scipy")
    ax1.plot(ans.m, ans.values, c="black", lw=1.0, label=inputs.function)
    ax1.set_ylabel(inputs.function)
    ax1.legend()
    ax1.tick_params(direction="in")

    ax2.scatter(ans.m, ans.ulp, c="blue", s=4.0)
    ax2.axhline(1.0, c="gray", ls="--")
    ax2.set_xlabel('m')
    ax2.set_ylabel('Error (single precision ULP)')
    ax2.tick_params(direction="in")

    fig.tight_layout()

    if inputs.plots == 2 or inputs.plots == 3:
        directory = os.path.dirname(os.path.abspath(inputs.filename))

        if is_writable(directory):
            fig.savefig(inputs.filename, dpi=150)
        else:
            print("Warning: Path to plot not writable, attempting to make plot in current directory")
            fig.savefig(os.path.basename(inputs.filename), dpi=150)

    if inputs.plots == 3:
        plt.close(fig)
    else:
        plt.show()

def is_writable(directory):
    return os.access(directory, os.W_OK)
