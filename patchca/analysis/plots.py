
import numpy as np
import matplotlib.pyplot as plt
def plot_landscape(m, path, title=None):
    plt.figure(); plt.imshow(1 - np.asarray(m, dtype=float), cmap='gray', interpolation='nearest')
    plt.xticks([]); plt.yticks([])
    if title: plt.title(title)
    plt.savefig(path, dpi=150, bbox_inches='tight'); plt.close()
def plot_patch_stats(stats, path_prefix, tag=''):
    suffix = f' ({tag})' if tag else ''
    plt.figure(); plt.loglog(stats.ccdf['area'], stats.ccdf['ccdf'], '.')
    plt.xlabel('patch area'); plt.ylabel('P(area >= A)'); plt.title('Patch size CDF' + suffix)
    plt.savefig(path_prefix+'_ccdf.png', dpi=150, bbox_inches='tight'); plt.close()
    plt.figure(); plt.loglog(stats.table['perimeter'], stats.table['area'], '.')
    plt.xlabel('perimeter'); plt.ylabel('area'); plt.title('Perimeter vs Area' + suffix)
    plt.savefig(path_prefix+'_perimeter_area.png', dpi=150, bbox_inches='tight'); plt.close()
def plot_timeseries(df, path_prefix, ft=None):
    plt.figure(); plt.plot(df['t'], df['cover']); plt.xlabel('t'); plt.ylabel('cover')
    if ft is not None: plt.axhline(ft, color='k', ls='--', lw=0.8)
    plt.savefig(path_prefix+'_cover.png', dpi=150, bbox_inches='tight'); plt.close()
    plt.figure(); plt.plot(df['t'], df['born'], label='born'); plt.plot(df['t'], df['died'], label='died')
    plt.xlabel('t'); plt.ylabel('transitions'); plt.legend()
    plt.savefig(path_prefix+'_transitions.png', dpi=150, bbox_inches='tight'); plt.close()
