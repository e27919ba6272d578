"""
Benchmark analysis: speedup and efficiency of threaded updates per worker
count, rendered as a dashboard figure.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.gridspec import GridSpec

logger = logging.getLogger(__name__)

IDEAL_LINE_COLOR = '#C73E1D'

TITLE_FONT = {'family': 'sans-serif', 'weight': 'bold', 'size': 14}
LABEL_FONT = {'family': 'sans-serif', 'weight': 'normal', 'size': 11}

REQUIRED_COLUMNS = {"grid_size", "workers", "generations", "time_per_gen_ms"}


def load_results(csv_path) -> pd.DataFrame:
    """Load benchmark results, accepting the older single-threaded column names."""
    df = pd.read_csv(csv_path)

    df = df.rename(columns={
        'size': 'grid_size',
        'time_per_generation_ms': 'time_per_gen_ms',
        'cells_per_second_million': 'throughput_mcells_s',
    })
    if 'workers' not in df.columns:
        df['workers'] = 1

    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"{csv_path}: missing column(s) {', '.join(sorted(missing))}")

    logger.info("Loaded %d results from %s", len(df), csv_path)
    return df


def calculate_metrics(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add speedup and efficiency columns relative to the single-worker run of
    the same grid size. Sizes without a single-worker run get NaN.
    """
    metrics = df.sort_values(['grid_size', 'workers']).reset_index(drop=True)

    baseline = (metrics[metrics['workers'] == 1]
                .groupby('grid_size')['time_per_gen_ms'].min())
    metrics['speedup'] = metrics['grid_size'].map(baseline) / metrics['time_per_gen_ms']
    metrics['efficiency'] = metrics['speedup'] / metrics['workers'] * 100
    if 'throughput_mcells_s' not in metrics.columns:
        metrics['throughput_mcells_s'] = (
            metrics['grid_size'] ** 2 / metrics['time_per_gen_ms'] / 1000
        )

    if 'final_live_cells' in metrics.columns:
        spread = metrics.groupby('grid_size')['final_live_cells'].nunique()
        for size in spread[spread > 1].index:
            logger.warning("Grid size %d: final populations differ across worker counts", size)

    return metrics


def best_configuration(metrics: pd.DataFrame) -> pd.DataFrame:
    """Fastest worker count for each grid size."""
    idx = metrics.groupby('grid_size')['time_per_gen_ms'].idxmin()
    return metrics.loc[idx, ['grid_size', 'workers', 'time_per_gen_ms', 'speedup']].reset_index(drop=True)


def create_dashboard(metrics: pd.DataFrame):
    """Four panels: time per generation, throughput, speedup and efficiency."""
    sns.set_palette("husl")
    fig = plt.figure(figsize=(16, 11))
    fig.patch.set_facecolor('white')
    gs = GridSpec(2, 2, figure=fig, hspace=0.3, wspace=0.25)

    ax1 = fig.add_subplot(gs[0, 0])
    sns.lineplot(data=metrics, x='grid_size', y='time_per_gen_ms', hue='workers',
                 marker='o', palette='husl', ax=ax1)
    ax1.set_xscale('log', base=2)
    ax1.set_yscale('log')
    ax1.set_title('Time per generation', fontdict=TITLE_FONT)
    ax1.set_xlabel('Grid size (N x N)', fontdict=LABEL_FONT)
    ax1.set_ylabel('ms', fontdict=LABEL_FONT)

    ax2 = fig.add_subplot(gs[0, 1])
    sns.lineplot(data=metrics, x='grid_size', y='throughput_mcells_s', hue='workers',
                 marker='s', palette='husl', ax=ax2)
    ax2.set_xscale('log', base=2)
    ax2.set_title('Throughput', fontdict=TITLE_FONT)
    ax2.set_xlabel('Grid size (N x N)', fontdict=LABEL_FONT)
    ax2.set_ylabel('Million cells / s', fontdict=LABEL_FONT)

    ax3 = fig.add_subplot(gs[1, 0])
    sns.lineplot(data=metrics, x='workers', y='speedup', hue='grid_size',
                 marker='o', palette='viridis', ax=ax3)
    workers = np.sort(metrics['workers'].unique())
    ax3.plot(workers, workers, '--', color=IDEAL_LINE_COLOR, alpha=0.6, label='ideal')
    ax3.set_title('Speedup vs single worker', fontdict=TITLE_FONT)
    ax3.set_xlabel('Workers', fontdict=LABEL_FONT)
    ax3.set_ylabel('Speedup', fontdict=LABEL_FONT)
    ax3.legend(title='grid size')

    ax4 = fig.add_subplot(gs[1, 1])
    pivot = metrics.pivot_table(index='grid_size', columns='workers', values='efficiency')
    sns.heatmap(pivot, annot=True, fmt='.0f', cmap='RdYlGn', ax=ax4,
                cbar_kws={'label': 'Efficiency (%)'})
    ax4.set_title('Parallel efficiency (%)', fontdict=TITLE_FONT)
    ax4.set_xlabel('Workers', fontdict=LABEL_FONT)
    ax4.set_ylabel('Grid size', fontdict=LABEL_FONT)

    fig.suptitle("Game of Life - threaded update scaling", fontsize=16, fontweight='bold')
    return fig


def analyze(csv_path, output_path) -> pd.DataFrame:
    """Load a benchmark CSV, print the best configurations and save the dashboard."""
    metrics = calculate_metrics(load_results(csv_path))

    print("=" * 60)
    print("BEST CONFIGURATION FOR EACH GRID SIZE")
    print("=" * 60)
    for r in best_configuration(metrics).itertuples(index=False):
        print(f"Grid {r.grid_size:>5}x{r.grid_size:<5}: {r.workers:>2} worker(s) "
              f"{r.time_per_gen_ms:>10.4f} ms/gen  speedup {r.speedup:.2f}x")
    print("=" * 60)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = create_dashboard(metrics)
    fig.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white')
    plt.close(fig)
    logger.info("Dashboard saved to %s", output_path)
    return metrics
