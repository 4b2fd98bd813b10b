import pandas as pd

from resample_stat.distributions import ParametricDistribution


def mouse_data(dataset):
    """Mouse data

    Survival times, in days, of 16 mice after a test surgery: 7 received
    a treatment, 9 were controls. From Table 2.1 of An Introduction to
    the Bootstrap by Bradley Efron and Robert J. Tibshirani.

    """
    treatment = [94, 197, 16, 38, 99, 141, 23]
    control = [52, 104, 146, 10, 51, 30, 40, 27, 46]

    if dataset == "control":
        return control
    elif dataset == "treatment":
        return treatment
    else:
        raise ValueError("Please specify either 'control' or 'treatment'")


def patch_data():
    """The patch data.

    Taken from Table 10.1 of [ET93].

    Eight subjects wore medical patches designed to increase the blood
    levels of a certain natural hormone. Each subject had their blood
    levels of the hormone measured after wearing three different
    patches: a placebo patch, an "old" patch from a lot manufactured at
    an old plant, and a "new" patch from a newly opened plant. For each
    subject, z = oldpatch - placebo and y = newpatch - oldpatch. The
    ratio mean(y) / mean(z) measures bioequivalence and is a classic
    example of a biased, nonlinear statistic.

    """
    df = pd.DataFrame(
        {
            "subject": range(1, 9),
            "placebo": [9243, 9671, 11792, 13357, 9055, 6290, 12412, 18806],
            "oldpatch": [17649, 12013, 19979, 21816, 13850, 9806, 17208, 29044],
            "newpatch": [16449, 14614, 17274, 23798, 12560, 10157, 16570, 26325],
        }
    )
    df.set_index("subject", inplace=True)
    df["z"] = df["oldpatch"] - df["placebo"]
    df["y"] = df["newpatch"] - df["oldpatch"]
    return df


def heights_population():
    """Adult heights, in centimeters.

    A normal population with mean 175.7 and standard deviation 15.19,
    used to illustrate the sampling distribution of the mean.

    """
    return ParametricDistribution("normal", mean=175.7, sd=15.19)
