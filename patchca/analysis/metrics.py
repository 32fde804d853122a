
import numpy as np, pandas as pd
def metrics_from_log(log, ft, window=200):
    df = pd.DataFrame(log)
    df['cover_err'] = df['cover'] - ft
    tail = df['cover'].iloc[-window:]
    final_cover = float(df['cover'].iloc[-1])
    # first step at which cover came within 0.02 of the target
    t_reach = float(next((t for t,e in zip(df['t'], np.abs(df['cover_err'])) if e<0.02), np.nan))
    transitions = int(df['born'].sum() + df['died'].sum())
    clamped = int(df['clamped'].sum())
    return {'final_cover':final_cover,'cover_error':final_cover-ft,'tail_mean_cover':float(tail.mean()),
            'tail_std_cover':float(tail.std(ddof=0)),'time_to_target':t_reach,'transitions':transitions,
            'clamped_cells':clamped}, df
def landscape_metrics(stats):
    return {'n_patches':stats.n_patches,'largest_patch':stats.largest_patch,
            'mean_patch_area':float(stats.table['area'].mean()) if stats.n_patches else 0.0,
            'total_perimeter':int(stats.table['perimeter'].sum()),
            'fractal_dimension':stats.fractal_dimension}
